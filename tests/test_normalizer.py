import unittest

from wealthlens.engine.mappings import (
    risk_tolerance_storage_label,
    timeframe_bucket,
    to_asset_type,
    to_city_tier,
    to_frequency,
    to_priority,
    to_risk_tolerance,
)
from wealthlens.engine.models import (
    AssetType,
    CityTier,
    Frequency,
    Priority,
    RiskTolerance,
)
from wealthlens.engine.normalizer import normalize, parse_timeframe
from wealthlens.errors import InvalidInputError


class NormalizeTests(unittest.TestCase):
    def test_missing_snapshot_is_invalid(self):
        with self.assertRaises(InvalidInputError):
            normalize(None)

    def test_non_mapping_is_invalid(self):
        with self.assertRaises(InvalidInputError):
            normalize(["not", "a", "snapshot"])

    def test_empty_mapping_gives_empty_sections(self):
        snap = normalize({})
        self.assertEqual(snap.equity_holdings, ())
        self.assertEqual(snap.fund_holdings, ())
        self.assertEqual(snap.external_assets, ())
        self.assertIsNone(snap.user_profile)

    def test_bad_numbers_clamp_to_zero(self):
        snap = normalize({"equityHoldings": [
            {"symbol": "ABC", "quantity": -5, "averageCost": "abc", "currentPrice": float("nan")},
            {"symbol": "XYZ", "quantity": 2.7, "averageCost": 10, "currentPrice": 12},
        ]})
        bad, good = snap.equity_holdings
        self.assertEqual(bad.quantity, 0)
        self.assertEqual(bad.average_cost, 0.0)
        self.assertEqual(bad.current_price, 0.0)
        self.assertEqual(bad.sector, "Unknown")
        self.assertEqual(good.quantity, 2)
        self.assertEqual(good.current_value, 24.0)

    def test_dashboard_section_keys(self):
        snap = normalize({
            "stocks": [{"symbol": "INFY", "quantity": 1, "averagePrice": 100, "currentPrice": 110}],
            "mutualFunds": [{"name": "Axis", "investedAmount": 10, "currentValue": 11}],
            "externalInvestments": [{"investment_name": "FD", "investment_type": "Fixed Deposit", "amount": 500}],
            "expenses": [{"description": "Rent", "expense_type": "Rent", "amount": 1000, "frequency": "monthly"}],
            "userInfo": {"age": 30, "city": "Pune", "riskTolerance": "low"},
        })
        self.assertEqual(snap.equity_holdings[0].average_cost, 100.0)
        self.assertEqual(snap.fund_holdings[0].name, "Axis")
        self.assertEqual(snap.external_assets[0].type, AssetType.FIXED_DEPOSIT)
        self.assertEqual(snap.recurring_expenses[0].name, "Rent")
        self.assertEqual(snap.user_profile.city, CityTier.TIER1)
        self.assertEqual(snap.user_profile.risk_tolerance, RiskTolerance.CONSERVATIVE)

    def test_unknown_labels_fall_back(self):
        snap = normalize({
            "externalAssets": [{"name": "Art", "type": "Paintings", "amount": 100, "notes": 42}],
            "recurringExpenses": [{"name": "Gym", "type": "Fitness", "amount": 50, "frequency": "weekly"}],
            "futureExpenses": [{"purpose": "boat", "amount": 10, "priority": "urgent", "timeframe": "someday"}],
        })
        self.assertEqual(snap.external_assets[0].type, AssetType.OTHERS)
        self.assertEqual(snap.external_assets[0].notes, "42")
        self.assertEqual(snap.recurring_expenses[0].frequency, Frequency.ONE_TIME)
        future = snap.future_expenses[0]
        self.assertEqual(future.priority, Priority.MEDIUM)
        self.assertIsNone(future.timeframe)

    def test_snapshot_passes_through(self):
        snap = normalize({"equityHoldings": [{"symbol": "A", "quantity": 1}]})
        self.assertIs(normalize(snap), snap)


class TimeframeTests(unittest.TestCase):
    def test_months(self):
        tf = parse_timeframe("6 months")
        self.assertEqual(tf.unit, "months")
        self.assertEqual(tf.months, 6.0)
        self.assertEqual(tf.years, 0.5)

    def test_years(self):
        tf = parse_timeframe("2 Years")
        self.assertEqual(tf.unit, "years")
        self.assertEqual(tf.months, 24.0)

    def test_bare_unit_counts_one(self):
        self.assertEqual(parse_timeframe("a year").years, 1.0)

    def test_hyphenated_horizons(self):
        five = parse_timeframe("5-year")
        self.assertEqual((five.unit, five.count), ("years", 5.0))
        self.assertEqual(parse_timeframe("10-year plan").years, 10.0)
        eighteen = parse_timeframe("18-month")
        self.assertEqual((eighteen.unit, eighteen.count), ("months", 18.0))

    def test_bucket_names(self):
        self.assertEqual(parse_timeframe("short_term").years, 1.0)
        self.assertEqual(parse_timeframe("medium-term").years, 5.0)
        self.assertEqual(parse_timeframe("long_term").years, 10.0)

    def test_mapping_form(self):
        self.assertEqual(parse_timeframe({"unit": "months", "count": 18}).years, 1.5)
        self.assertIsNone(parse_timeframe({"unit": "weeks", "count": 3}))

    def test_unparseable(self):
        self.assertIsNone(parse_timeframe(None))
        self.assertIsNone(parse_timeframe(""))
        self.assertIsNone(parse_timeframe("after the promo"))

    def test_bucket_for_years(self):
        self.assertEqual(timeframe_bucket(0.5), "short_term")
        self.assertEqual(timeframe_bucket(3), "medium_term")
        self.assertEqual(timeframe_bucket(12), "long_term")


class MappingTests(unittest.TestCase):
    def test_asset_type_labels(self):
        self.assertEqual(to_asset_type("FD"), AssetType.FIXED_DEPOSIT)
        self.assertEqual(to_asset_type("fixed_deposit"), AssetType.FIXED_DEPOSIT)
        self.assertEqual(to_asset_type("National Pension Scheme"), AssetType.NPS)
        self.assertEqual(to_asset_type("ppf"), AssetType.PPF)
        self.assertEqual(to_asset_type(None), AssetType.OTHERS)

    def test_risk_words(self):
        self.assertEqual(to_risk_tolerance("medium"), RiskTolerance.MODERATE)
        self.assertEqual(to_risk_tolerance("HIGH"), RiskTolerance.AGGRESSIVE)
        self.assertEqual(to_risk_tolerance("aggressive"), RiskTolerance.AGGRESSIVE)
        self.assertEqual(to_risk_tolerance("yolo"), RiskTolerance.MODERATE)

    def test_risk_storage_words_round_trip(self):
        for word in ("low", "medium", "high"):
            self.assertEqual(risk_tolerance_storage_label(to_risk_tolerance(word)), word)

    def test_city_tiers(self):
        self.assertEqual(to_city_tier("Mumbai"), CityTier.METRO)
        self.assertEqual(to_city_tier("tier2"), CityTier.TIER2)
        self.assertEqual(to_city_tier("Springfield"), CityTier.OVERSEAS)

    def test_frequency_and_priority(self):
        self.assertEqual(to_frequency("Annually"), Frequency.YEARLY)
        self.assertEqual(to_frequency("one-time"), Frequency.ONE_TIME)
        self.assertEqual(to_priority("HIGH"), Priority.HIGH)


if __name__ == "__main__":
    unittest.main()
