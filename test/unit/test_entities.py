# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

import pickle
from unittest import TestCase

from spineinterface.entities import Anything, Entity, RelationshipKey, anything


class TestEntity(TestCase):
    def test_equality_is_by_class_and_name(self):
        # Arrange
        a = Entity("Her", "film")
        b = Entity("Her", "film")

        # Assert
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a.id, b.id)
        self.assertNotEqual(Entity("Her", "film"), Entity("Her", "character"))

    def test_entity_is_immutable(self):
        entity = Entity("Her", "film")
        with self.assertRaises(AttributeError):
            entity.name = "Joker"

    def test_str_and_repr(self):
        entity = Entity("Her", "film")
        self.assertEqual(str(entity), "Her")
        self.assertEqual(repr(entity), "Entity('film', 'Her')")

    def test_entities_sort_by_class_then_name(self):
        result = sorted([Entity("b", "y"), Entity("a", "y"), Entity("z", "x")])
        self.assertEqual([(e.class_name, e.name) for e in result], [("x", "z"), ("y", "a"), ("y", "b")])

    def test_pickle_round_trip(self):
        entity = Entity("Her", "film")
        self.assertEqual(pickle.loads(pickle.dumps(entity)), entity)


class TestAnything(TestCase):
    def test_anything_is_a_singleton(self):
        self.assertIs(Anything(), anything)
        self.assertIs(pickle.loads(pickle.dumps(anything)), anything)
        self.assertEqual(repr(anything), "anything")


class TestRelationshipKey(TestCase):
    def setUp(self):
        self.phoenix = Entity("Phoenix", "actor")
        self.joker = Entity("Joker", "film")
        self.key = RelationshipKey(("actor", "film"), (self.phoenix, self.joker))

    def test_behaves_as_tuple(self):
        # Act
        actor, film = self.key

        # Assert
        self.assertEqual(self.key, (self.phoenix, self.joker))
        self.assertEqual(hash(self.key), hash((self.phoenix, self.joker)))
        self.assertIs(actor, self.phoenix)
        self.assertIs(film, self.joker)
        self.assertIs(self.key[0], self.phoenix)

    def test_access_by_dimension_name(self):
        self.assertIs(self.key["film"], self.joker)
        self.assertIs(self.key.actor, self.phoenix)
        self.assertEqual(self.key.as_dict(), {"actor": self.phoenix, "film": self.joker})

    def test_unknown_dimension(self):
        with self.assertRaises(KeyError):
            self.key["character"]
        with self.assertRaises(AttributeError):
            self.key.character

    def test_wrong_arity_is_rejected(self):
        with self.assertRaises(ValueError):
            RelationshipKey(("actor", "film"), (self.phoenix,))

    def test_project(self):
        # Act
        projected = self.key.project(["film"])

        # Assert
        self.assertEqual(projected, (self.joker,))
        self.assertEqual(projected.dimensions, ("film",))

    def test_repr(self):
        self.assertEqual(repr(self.key), "(actor=Phoenix, film=Joker)")

    def test_pickle_round_trip(self):
        # Act
        result = pickle.loads(pickle.dumps(self.key))

        # Assert
        self.assertEqual(result, self.key)
        self.assertEqual(result.dimensions, ("actor", "film"))
