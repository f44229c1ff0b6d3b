def main() -> None:
    """Run development server with auto-reload."""
    import uvicorn

    from fraud_review.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "fraud_review.main:create_app",
        host=settings.server.host,
        port=settings.server.port,
        reload=True,
        factory=True,
        log_level="info",
    )
