import threading
from collections import OrderedDict
from fastapi import FastAPI
from .logging import setup_logging
from .api.routes import router as api_router
from .config import Settings, settings as default_settings
from .engine.market_data import NeutralMarketData, StaticMarketData

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="wealthlens")
    app.state.analysis_config = settings.analysis_config()
    app.state.market_data = (
        StaticMarketData.from_json_file(settings.market_data_path)
        if settings.market_data_path
        else NeutralMarketData()
    )
    app.state.history_max_reports = settings.history_max_reports
    app.state.history_max_users = settings.history_max_users
    app.state.histories = OrderedDict()
    app.state.history_lock = threading.Lock()
    app.include_router(api_router)
    return app

setup_logging()
app = create_app()
