"""
API module - FastAPI routers, endpoint definitions and error handlers.

Usage:
    from campusnav.api.routes import api_router
    app.include_router(api_router, prefix="/api")
"""
