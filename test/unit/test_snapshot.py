# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

import threading
from unittest import TestCase

from spineinterface.classes import ObjectClass, RelationshipClass
from spineinterface.data_classes.dataset import (
    DatasetData,
    ObjectClassData,
    ParameterData,
    ParameterValueData,
    RelationshipClassData,
    TimeSeriesData,
    TimeSeriesEntryData,
)
from spineinterface.exceptions import ParameterNotSpecifiedError, PopulationError, UnknownClassError
from spineinterface.parameters import Parameter
from spineinterface.snapshot import Dataset, DatasetSnapshot, build_snapshot
from test.unit.utils.data import TestData


class TestMoviesScenario(TestCase):
    def setUp(self):
        self.snapshot = TestData.movies()

    def test_lookup_by_name(self):
        self.assertIsInstance(self.snapshot["actor"], ObjectClass)
        self.assertIsInstance(self.snapshot["actor__film"], RelationshipClass)
        self.assertIsInstance(self.snapshot["character_name"], Parameter)
        self.assertIn("release_year", self.snapshot)

    def test_films_of_an_actor(self):
        # Act
        result = self.snapshot["actor__film"](actor="Johansson")

        # Assert
        self.assertEqual([str(film) for film in result], ["Her"])

    def test_actors_of_a_film(self):
        # Act
        result = self.snapshot["actor__film"](film="Her")

        # Assert
        self.assertEqual([str(actor) for actor in result], ["Phoenix", "Johansson"])

    def test_character_name(self):
        # Act
        result = self.snapshot["character_name"].resolve({"actor": "Phoenix", "film": "Joker"})

        # Assert
        self.assertEqual(result, "Arthur")

    def test_character_name_of_unrelated_pair_strict(self):
        with self.assertRaises(ParameterNotSpecifiedError):
            self.snapshot["character_name"].resolve({"actor": "Johansson", "film": "Joker"}, strict=True)

    def test_character_name_of_unrelated_pair_not_strict(self):
        # Act
        result = self.snapshot["character_name"].resolve({"actor": "Johansson", "film": "Joker"}, strict=False)

        # Assert
        self.assertIsNone(result)

    def test_release_years_of_films_of_an_actor(self):
        # Arrange
        release_year = self.snapshot["release_year"]

        # Act
        years = [release_year(film=film) for film in self.snapshot["actor__film"](actor="Phoenix")]

        # Assert
        self.assertEqual(years, [2019, 2013])

    def test_unknown_name(self):
        with self.assertRaises(UnknownClassError) as context:
            self.snapshot["director"]
        self.assertIn("actor", context.exception.available)

    def test_typed_accessors(self):
        self.assertIs(self.snapshot.object_class("film"), self.snapshot["film"])
        self.assertIs(self.snapshot.relationship_class("actor__film"), self.snapshot["actor__film"])
        self.assertIs(self.snapshot.parameter("release_year"), self.snapshot["release_year"])
        with self.assertRaises(UnknownClassError):
            self.snapshot.object_class("actor__film")


class TestBuildSnapshot(TestCase):
    def test_empty_dataset(self):
        # Act
        snapshot = build_snapshot(DatasetData())

        # Assert
        self.assertEqual(list(snapshot), [])

    def test_name_clash_between_class_and_parameter(self):
        # Arrange
        data = DatasetData(
            object_classes=[ObjectClassData(name="node", objects=["a"])],
            parameters=[ParameterData(name="node", class_name="node")],
        )

        # Act & Assert
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_duplicate_object_class(self):
        data = DatasetData(object_classes=[ObjectClassData(name="node"), ObjectClassData(name="node")])
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_relationship_with_unknown_class(self):
        data = DatasetData(
            relationship_classes=[RelationshipClassData(name="node__unit", object_classes=["node", "unit"])]
        )
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_relationship_with_unknown_object(self):
        data = DatasetData(
            object_classes=[ObjectClassData(name="node", objects=["a"])],
            relationship_classes=[
                RelationshipClassData(name="node__node", object_classes=["node", "node"], relationships=[["a", "b"]])
            ],
        )
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_parameter_on_unknown_class(self):
        data = DatasetData(parameters=[ParameterData(name="demand", class_name="node")])
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_duplicate_parameter_value(self):
        data = DatasetData(
            object_classes=[ObjectClassData(name="node", objects=["a"])],
            parameters=[
                ParameterData(
                    name="demand",
                    class_name="node",
                    values=[ParameterValueData(entities="a", value=1), ParameterValueData(entities="a", value=2)],
                )
            ],
        )
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_invalid_time_slice_becomes_population_error(self):
        # Arrange
        series = TimeSeriesData(data=[TimeSeriesEntryData(start=5, end=1, value=1.0)])
        data = DatasetData(
            object_classes=[ObjectClassData(name="node", objects=["a"])],
            parameters=[
                ParameterData(name="inflow", class_name="node", values=[ParameterValueData(entities="a", value=series)])
            ],
        )

        # Act & Assert
        with self.assertRaises(PopulationError):
            build_snapshot(data)

    def test_parameter_merged_across_classes(self):
        # Arrange
        data = DatasetData(
            object_classes=[ObjectClassData(name="node", objects=["a"]), ObjectClassData(name="unit", objects=["u"])],
            parameters=[
                ParameterData(name="capacity", class_name="node", values=[ParameterValueData(entities="a", value=1)]),
                ParameterData(name="capacity", class_name="unit", values=[ParameterValueData(entities="u", value=2)]),
            ],
        )

        # Act
        snapshot = build_snapshot(data)

        # Assert
        self.assertEqual(snapshot["capacity"](node="a"), 1)
        self.assertEqual(snapshot["capacity"](unit="u"), 2)
        self.assertEqual(len(snapshot.parameters), 1)

    def test_default_value_for_object_class(self):
        # Arrange
        data = DatasetData(
            object_classes=[ObjectClassData(name="node", objects=["a", "b"])],
            parameters=[
                ParameterData(
                    name="demand",
                    class_name="node",
                    default_value=0,
                    values=[ParameterValueData(entities="a", value=5)],
                )
            ],
        )

        # Act
        snapshot = build_snapshot(data)

        # Assert
        self.assertEqual(snapshot["demand"](node="a"), 5)
        self.assertEqual(snapshot["demand"](node="b"), 0)


class TestDataset(TestCase):
    def test_snapshot_before_publish(self):
        with self.assertRaises(RuntimeError):
            Dataset().snapshot

    def test_repopulate_publishes_new_snapshot(self):
        # Arrange
        dataset = Dataset()

        # Act
        snapshot = dataset.repopulate(TestData.load("movies.yaml"))

        # Assert
        self.assertIs(dataset.snapshot, snapshot)
        self.assertEqual(dataset.version, 1)

    def test_failed_repopulation_keeps_previous_snapshot(self):
        # Arrange
        dataset = Dataset(TestData.movies())
        previous = dataset.snapshot
        broken = DatasetData(parameters=[ParameterData(name="demand", class_name="node")])

        # Act
        with self.assertRaises(PopulationError):
            dataset.repopulate(broken)

        # Assert
        self.assertIs(dataset.snapshot, previous)
        self.assertEqual(dataset.version, 1)

    def test_readers_keep_their_snapshot_during_repopulation(self):
        # Arrange
        dataset = Dataset(TestData.movies())
        held = dataset.snapshot
        results = []

        def read():
            results.append(held["release_year"](film="Her"))

        # Act
        dataset.repopulate(TestData.load("energy.yaml"))
        thread = threading.Thread(target=read)
        thread.start()
        thread.join()

        # Assert
        self.assertEqual(results, [2013])
        self.assertNotIn("release_year", dataset.snapshot)
        self.assertEqual(dataset.version, 2)

    def test_snapshot_repr(self):
        self.assertIsInstance(repr(DatasetSnapshot({}, {}, {})), str)
