from __future__ import annotations

import unittest
from datetime import datetime

from csse_ingest.domain.records import PointRecord
from csse_ingest.normalizers.row_normalizer import DailyReportRowNormalizer, normalize_row


class TestRowNormalizer(unittest.TestCase):
    def setUp(self) -> None:
        self.normalizer = DailyReportRowNormalizer()

    def test_full_row_maps_every_column_by_position(self) -> None:
        record = self.normalizer.normalize(
            ["Hubei", "Mainland China", "3/8/20 05:31", "67707", "2986", "45235", "30.9756", "112.2707"]
        )

        self.assertEqual(record.province, "Hubei")
        self.assertEqual(record.country, "Mainland China")
        self.assertEqual(record.updated, datetime(2020, 3, 8, 5, 31))
        self.assertEqual(record.confirmed, 67707)
        self.assertEqual(record.deaths, 2986)
        self.assertEqual(record.recovered, 45235)
        self.assertAlmostEqual(record.lat, 30.9756, places=4)
        self.assertAlmostEqual(record.long, 112.2707, places=4)
        self.assertTrue(record.has_valid_timestamp)

    def test_short_row_uses_fallbacks(self) -> None:
        record = normalize_row(["Hubei", "China", "2020-01-22T17:00:00"])

        self.assertEqual(
            record,
            PointRecord(
                province="Hubei",
                country="China",
                updated=datetime(2020, 1, 22, 17, 0, 0),
                confirmed=0,
                deaths=0,
                recovered=0,
                lat=None,
                long=None,
            ),
        )

    def test_empty_row_yields_all_fallbacks(self) -> None:
        record = normalize_row([])

        self.assertEqual(record.province, "")
        self.assertEqual(record.country, "")
        self.assertEqual(record.updated, datetime(1970, 1, 1))
        self.assertFalse(record.has_valid_timestamp)
        self.assertEqual((record.confirmed, record.deaths, record.recovered), (0, 0, 0))
        self.assertIsNone(record.lat)
        self.assertIsNone(record.long)

    def test_empty_cells_match_missing_cells(self) -> None:
        short = normalize_row(["", "Italy", "2020-03-01T23:43:03"])
        padded = normalize_row(["", "Italy", "2020-03-01T23:43:03", "", "", "", "", ""])

        self.assertEqual(short, padded)

    def test_bad_cells_do_not_drop_the_row(self) -> None:
        record = normalize_row(["", "Japan", "sometime", "n/a", "-2", "3", "north", "139.69"])

        self.assertEqual(record.country, "Japan")
        self.assertFalse(record.has_valid_timestamp)
        self.assertEqual(record.confirmed, 0)
        self.assertEqual(record.deaths, 0)
        self.assertEqual(record.recovered, 3)
        self.assertIsNone(record.lat)
        self.assertAlmostEqual(record.long, 139.69, places=2)

    def test_extra_trailing_columns_are_ignored(self) -> None:
        record = normalize_row(["", "Spain", "2020-03-22T23:45:00", "1", "2", "3", "40.0", "-4.0", "extra", "more"])

        self.assertEqual(record.country, "Spain")
        self.assertAlmostEqual(record.long, -4.0)

    def test_normalizing_twice_is_identical(self) -> None:
        row = ["Ontario", "Canada", "2/1/2020 19:43", "3", "0", "0", "51.2538", "-85.3232"]

        self.assertEqual(normalize_row(row), normalize_row(row))

    def test_normalize_rows_preserves_order(self) -> None:
        records = self.normalizer.normalize_rows(
            [
                ["", "Italy", "2020-03-01T23:43:03", "1694"],
                ["", "France", "2020-03-01T23:43:03", "130"],
            ]
        )

        self.assertEqual([record.country for record in records], ["Italy", "France"])

    def test_record_serializes_to_dict(self) -> None:
        payload = normalize_row(["Hubei", "China", "2020-01-22T17:00:00", "444"]).to_dict()

        self.assertEqual(payload["updated"], "2020-01-22T17:00:00")
        self.assertEqual(payload["confirmed"], 444)
        self.assertIsNone(payload["lat"])


if __name__ == "__main__":
    unittest.main()
