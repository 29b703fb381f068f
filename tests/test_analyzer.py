import unittest

from wealthlens.engine.analyzer import analyze_portfolio
from wealthlens.engine.brokerage import holdings_from_brokerage
from wealthlens.engine.market_data import StaticMarketData
from wealthlens.engine.models import AnalysisConfig, InsightType, Priority
from wealthlens.errors import InvalidInputError
from wealthlens.history import ReportHistory
from wealthlens.insights.rebalancing import BALANCED_MESSAGE

FIXED_TS = "2024-01-01T00:00:00+00:00"

SNAPSHOT = {
    "equityHoldings": [
        {"symbol": "TCS", "quantity": 10, "averageCost": 100, "currentPrice": 150, "sector": "Tech"},
    ],
}


class AnalyzePortfolioTests(unittest.TestCase):
    def test_single_tech_holding(self):
        report = analyze_portfolio(SNAPSHOT, generated_at=FIXED_TS)
        self.assertEqual(report.generated_at, FIXED_TS)
        self.assertEqual(len(report.asset_allocation), 1)
        self.assertEqual(report.asset_allocation[0].type, "Equities")
        self.assertEqual(report.asset_allocation[0].value, 1500.0)
        self.assertEqual(report.asset_allocation[0].percentage, 100.0)
        sector = report.sector_breakdown[0]
        self.assertEqual((sector.sector, sector.total_value, sector.percentage), ("Tech", 1500.0, 100.0))
        self.assertEqual(report.performance_metrics.profit_loss, 500.0)
        self.assertEqual(report.performance_metrics.profit_loss_percentage, 50.0)
        self.assertEqual(report.risk_metrics.portfolio_beta, 1.0)
        first = report.insights[0]
        self.assertEqual((first.type, first.priority), (InsightType.WARNING, Priority.HIGH))
        self.assertEqual(len(report.rebalancing_recommendations), 3)

    def test_same_input_same_report(self):
        a = analyze_portfolio(SNAPSHOT, generated_at=FIXED_TS)
        b = analyze_portfolio(SNAPSHOT, generated_at=FIXED_TS)
        self.assertEqual(a.model_dump(mode="json", by_alias=True), b.model_dump(mode="json", by_alias=True))

    def test_empty_snapshot(self):
        report = analyze_portfolio({}, generated_at=FIXED_TS)
        self.assertEqual(report.asset_allocation, ())
        self.assertEqual(report.sector_breakdown, ())
        self.assertEqual(report.performance_metrics.total_value, 0.0)
        self.assertEqual(report.risk_metrics.portfolio_beta, 1.0)
        self.assertEqual(report.goal_analysis.shortfall, 0.0)
        self.assertEqual(report.liquidity_buffer, 0.0)
        self.assertEqual(report.rebalancing_recommendations, (BALANCED_MESSAGE,))
        self.assertEqual(report.tax_insights.potential_savings, 0.0)
        self.assertEqual(report.insights, ())

    def test_missing_snapshot(self):
        with self.assertRaises(InvalidInputError):
            analyze_portfolio(None)

    def test_liquidity_buffer_in_report(self):
        snap = {"recurringExpenses": [{"name": "Rent", "type": "Rent", "amount": 10000, "frequency": "monthly"}]}
        report = analyze_portfolio(snap, generated_at=FIXED_TS)
        self.assertEqual(report.liquidity_buffer, 60000.0)
        self.assertIn("₹60,000", report.liquidity_analysis)

    def test_goal_uses_net_worth(self):
        snap = {
            "equityHoldings": SNAPSHOT["equityHoldings"],
            "externalAssets": [{"name": "FD", "type": "FD", "amount": 8500}],
            "futureExpenses": [{"purpose": "car", "amount": 100000, "timeframe": "2 years"}],
        }
        goal = analyze_portfolio(snap, generated_at=FIXED_TS).goal_analysis
        self.assertEqual(goal.current_value, 10000.0)
        self.assertEqual(goal.target_value, 100000.0)
        self.assertEqual(goal.timeframe_years, 2.0)
        self.assertEqual(goal.projected_value, 12544.0)

    def test_config_and_market_data_flow_through(self):
        md = StaticMarketData(betas={"TCS": 1.6})
        report = analyze_portfolio(
            SNAPSHOT,
            config=AnalysisConfig(sector_concentration_pct=100.0),
            market_data=md,
            generated_at=FIXED_TS,
        )
        self.assertEqual(report.risk_metrics.portfolio_beta, 1.6)
        types = [i.type for i in report.insights]
        self.assertNotIn(InsightType.WARNING, types)
        self.assertIn(InsightType.VOLATILITY, types)

    def test_camel_case_output(self):
        payload = analyze_portfolio(SNAPSHOT, generated_at=FIXED_TS).model_dump(mode="json", by_alias=True)
        self.assertIn("assetAllocation", payload)
        self.assertIn("profitLossPercentage", payload["performanceMetrics"])
        self.assertIn("rebalancingRecommendations", payload)


class ReportHistoryTests(unittest.TestCase):
    def test_keeps_most_recent_ten(self):
        history = ReportHistory()
        reports = [analyze_portfolio({}, generated_at=f"2024-01-{i:02d}") for i in range(1, 13)]
        evicted = [history.append(r) for r in reports]
        self.assertEqual(len(history), 10)
        self.assertEqual(history.items()[0].generated_at, "2024-01-03")
        self.assertEqual(history.latest().generated_at, "2024-01-12")
        self.assertEqual(evicted[:10], [None] * 10)
        self.assertEqual(evicted[10].generated_at, "2024-01-01")

    def test_capacity_must_be_positive(self):
        with self.assertRaises(ValueError):
            ReportHistory(0)

    def test_empty(self):
        self.assertIsNone(ReportHistory(3).latest())


class BrokerageTests(unittest.TestCase):
    def test_maps_equities_and_funds(self):
        rows = [
            {"tradingsymbol": "infy", "exchange": "NSE", "quantity": 10, "average_price": 1400, "last_price": 1500},
            {"tradingsymbol": "AXISMF01", "exchange": "", "quantity": 100, "average_price": 10, "last_price": 12,
             "fund": "Axis Bluechip"},
            {"tradingsymbol": "GOLDM", "exchange": "MCX", "quantity": 1, "average_price": 1, "last_price": 1},
            "garbage",
        ]
        equities, funds = holdings_from_brokerage(rows, {"INFY": "Technology"})
        self.assertEqual(len(equities), 1)
        self.assertEqual(equities[0].symbol, "INFY")
        self.assertEqual(equities[0].sector, "Technology")
        self.assertEqual(equities[0].current_value, 15000.0)
        self.assertEqual(len(funds), 1)
        self.assertEqual(funds[0].name, "Axis Bluechip")
        self.assertEqual(funds[0].invested_amount, 1000.0)
        self.assertEqual(funds[0].current_value, 1200.0)

    def test_unknown_sector(self):
        equities, _ = holdings_from_brokerage([{"tradingsymbol": "ITC", "exchange": "BSE", "quantity": 1}])
        self.assertEqual(equities[0].sector, "Unknown")


if __name__ == "__main__":
    unittest.main()
