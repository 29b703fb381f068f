import unittest

from wealthlens.engine.allocation import compute_asset_allocation, compute_sector_breakdown
from wealthlens.engine.market_data import NeutralMarketData, StaticMarketData
from wealthlens.engine.models import AssetType, EquityHolding, ExternalAsset, FundHolding
from wealthlens.engine.performance import compute_performance
from wealthlens.engine.risk import compute_beta, compute_quality_score, describe_market_comparison


def _eq(symbol, qty, avg, price, sector="Tech"):
    return EquityHolding(symbol=symbol, quantity=qty, average_cost=avg, current_price=price, sector=sector)


class AllocationTests(unittest.TestCase):
    def test_single_equity(self):
        alloc = compute_asset_allocation([_eq("TCS", 10, 100, 150)], [], [])
        self.assertEqual(len(alloc), 1)
        self.assertEqual(alloc[0].type, "Equities")
        self.assertEqual(alloc[0].value, 1500.0)
        self.assertEqual(alloc[0].percentage, 100.0)

    def test_mixed_classes_sum_to_100_largest_first(self):
        alloc = compute_asset_allocation(
            [_eq("A", 10, 100, 100)],
            [FundHolding(name="F", invested_amount=2000, current_value=3000)],
            [
                ExternalAsset(name="FD", type=AssetType.FIXED_DEPOSIT, amount=500),
                ExternalAsset(name="FD2", type=AssetType.FIXED_DEPOSIT, amount=500),
                ExternalAsset(name="Gold", type=AssetType.GOLD, amount=0),
            ],
        )
        self.assertEqual([a.type for a in alloc], ["Mutual Funds", "Equities", "Fixed Deposit"])
        self.assertAlmostEqual(sum(a.percentage for a in alloc), 100.0, places=6)
        self.assertEqual(alloc[2].value, 1000.0)

    def test_all_zero_is_empty(self):
        alloc = compute_asset_allocation(
            [_eq("A", 0, 100, 100)],
            [FundHolding(name="F")],
            [ExternalAsset(name="Gold", type=AssetType.GOLD, amount=0)],
        )
        self.assertEqual(alloc, ())

    def test_sector_breakdown(self):
        sectors = compute_sector_breakdown([
            _eq("A", 4, 10, 10, "Tech"),
            _eq("B", 3, 10, 10, "Banks"),
            _eq("C", 3, 10, 10, "Pharma"),
        ])
        self.assertEqual([s.sector for s in sectors], ["Tech", "Banks", "Pharma"])
        self.assertAlmostEqual(sectors[0].percentage, 40.0)
        self.assertEqual(sectors[0].total_value, 40.0)

    def test_sector_labels_are_case_sensitive(self):
        sectors = compute_sector_breakdown([_eq("A", 1, 1, 1, "Tech"), _eq("B", 1, 1, 1, "tech")])
        self.assertEqual(len(sectors), 2)

    def test_no_equities_no_sectors(self):
        self.assertEqual(compute_sector_breakdown([]), ())


class PerformanceTests(unittest.TestCase):
    def test_profit(self):
        perf = compute_performance([_eq("TCS", 10, 100, 150)], [])
        self.assertEqual(perf.total_value, 1500.0)
        self.assertEqual(perf.profit_loss, 500.0)
        self.assertEqual(perf.profit_loss_percentage, 50.0)
        self.assertEqual(perf.cagr, 40.0)
        self.assertEqual(perf.irr, 45.0)
        self.assertEqual(perf.sharpe_ratio, 3.33)

    def test_funds_count_toward_basis(self):
        perf = compute_performance([], [FundHolding(name="F", invested_amount=1000, current_value=900)])
        self.assertEqual(perf.profit_loss, -100.0)
        self.assertEqual(perf.profit_loss_percentage, -10.0)

    def test_zero_basis(self):
        perf = compute_performance([_eq("GIFT", 5, 0, 20)], [])
        self.assertEqual(perf.total_value, 100.0)
        self.assertEqual(perf.profit_loss_percentage, 0.0)
        self.assertEqual(perf.cagr, 0.0)


class RiskTests(unittest.TestCase):
    def test_neutral_beta(self):
        self.assertEqual(compute_beta([_eq("A", 10, 1, 1)]), 1.0)
        self.assertEqual(compute_beta([]), 1.0)

    def test_value_weighted_beta(self):
        md = StaticMarketData(betas={"A": 1.5})
        beta = compute_beta([_eq("a", 10, 100, 100), _eq("B", 10, 100, 100)], md)
        self.assertEqual(beta, 1.25)

    def test_market_comparison_text(self):
        self.assertTrue(describe_market_comparison(1.5).startswith("Higher volatility"))
        self.assertTrue(describe_market_comparison(0.5).startswith("Lower volatility"))
        self.assertTrue(describe_market_comparison(1.0).startswith("In line"))

    def test_quality_without_data_is_perfect(self):
        q = compute_quality_score([FundHolding(name="F", current_value=100)], [_eq("A", 1, 1, 1)], NeutralMarketData())
        self.assertEqual(q.overall, 100.0)
        self.assertEqual(q.small_cap_exposure, 0.0)
        self.assertEqual(q.low_rated_funds, 0.0)

    def test_quality_penalties(self):
        md = StaticMarketData.from_dict({
            "market_caps": {"A": "small", "B": "large"},
            "fund_ratings": {"F1": 2, "F2": 5},
        })
        q = compute_quality_score(
            [FundHolding(name="F1", current_value=100), FundHolding(name="F2", current_value=100)],
            [_eq("A", 1, 1, 100), _eq("B", 1, 1, 100)],
            md,
        )
        self.assertEqual(q.small_cap_exposure, 50.0)
        self.assertEqual(q.low_rated_funds, 50.0)
        self.assertEqual(q.overall, 50.0)

    def test_unknown_cap_class_ignored(self):
        md = StaticMarketData(market_caps={"A": "micro"})
        self.assertIsNone(md.market_cap_class("A"))


if __name__ == "__main__":
    unittest.main()
