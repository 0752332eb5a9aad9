# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from unittest import TestCase

from spineinterface.classes import ObjectClass
from spineinterface.entities import Entity, anything
from spineinterface.exceptions import PopulationError, UnknownClassError, UnknownEntityError
from test.unit.utils.data import TestData


class TestObjectClass(TestCase):
    def setUp(self):
        self.film = ObjectClass("film", ["Her", "Joker"])

    def test_names_become_entities_in_insertion_order(self):
        # Act
        result = self.film()

        # Assert
        self.assertEqual(result, [Entity("Her", "film"), Entity("Joker", "film")])
        self.assertEqual(len(self.film), 2)
        self.assertEqual(self.film.dimensions, ("film",))

    def test_call_with_name_returns_the_entity(self):
        self.assertEqual(self.film("Joker"), Entity("Joker", "film"))
        self.assertEqual(self.film(Entity("Joker", "film")), Entity("Joker", "film"))

    def test_unknown_entity(self):
        with self.assertRaises(UnknownEntityError) as context:
            self.film("Titanic")
        self.assertEqual(context.exception.class_name, "film")
        self.assertEqual(context.exception.entity, "Titanic")

    def test_entity_of_another_class_is_unknown(self):
        with self.assertRaises(UnknownEntityError):
            self.film(Entity("Her", "actor"))

    def test_contains(self):
        self.assertIn("Her", self.film)
        self.assertIn(Entity("Her", "film"), self.film)
        self.assertNotIn(Entity("Her", "actor"), self.film)
        self.assertNotIn("Titanic", self.film)

    def test_duplicate_objects_are_rejected(self):
        with self.assertRaises(PopulationError):
            ObjectClass("film", ["Her", "Her"])

    def test_foreign_entities_are_rejected(self):
        with self.assertRaises(PopulationError):
            ObjectClass("film", [Entity("Phoenix", "actor")])

    def test_query_with_collection(self):
        # Act
        result = self.film(["Joker"])

        # Assert
        self.assertEqual(result, [Entity("Joker", "film")])

    def test_query_with_anything(self):
        self.assertEqual(self.film(anything), list(self.film))

    def test_empty_class_returns_default(self):
        # Arrange
        empty = ObjectClass("empty")
        sentinel = object()

        # Act & Assert
        self.assertEqual(empty(), [])
        self.assertIs(empty(_default=sentinel), sentinel)

    def test_empty_results_are_fresh_lists(self):
        empty = ObjectClass("empty")
        first = empty()
        first.append("x")
        self.assertEqual(empty(), [])


class TestObjectClassParameterFilters(TestCase):
    def setUp(self):
        self.snapshot = TestData.energy()
        self.commodity = self.snapshot["commodity"]

    def test_filter_by_parameter_value(self):
        # Act
        result = self.commodity(state_of_matter="gas")

        # Assert
        self.assertEqual(result, [self.commodity("wind")])

    def test_filter_by_collection_of_values(self):
        # Act
        result = self.commodity(state_of_matter=["gas", "liquid"])

        # Assert
        self.assertEqual(result, [self.commodity("wind"), self.commodity("water")])

    def test_filter_by_null_value(self):
        self.assertEqual(self.commodity(state_of_matter=None), [self.commodity("gas")])

    def test_filter_without_matches_returns_default(self):
        self.assertEqual(self.commodity(state_of_matter="plasma"), [])
        self.assertIsNone(self.commodity(state_of_matter="plasma", _default=None))

    def test_filter_by_unknown_parameter(self):
        with self.assertRaises(UnknownClassError):
            self.commodity(colour="blue")

    def test_parameters_are_registered_on_their_class(self):
        self.assertEqual(list(self.commodity.parameters), ["state_of_matter"])
        self.assertEqual(sorted(self.snapshot["node"].parameters), ["demand", "fuel_cost"])
