# Tool Search Gateway
# Main module initialization

from .main import app as app

__version__ = "0.1.0"


def main() -> None:
    """CLI entry point for the application."""
    import uvicorn

    from .config import get_config

    config = get_config()
    uvicorn.run("tool_search_gateway.main:app", host=config.host, port=config.port, reload=False)
