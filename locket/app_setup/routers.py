"""
Registre central des routers (pages web, auth, API PayPal, health).
"""
from fastapi import FastAPI
from fastapi.responses import Response
from starlette.status import HTTP_204_NO_CONTENT
from locket.pages.views import router as pages_router
from locket.auth.views import web_router as auth_web_router, api_router as auth_api_router
from locket.paypal.views import router as paypal_router
from locket.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l’application.
    - L’ordre n’a pas d’impact sauf conflits de chemins (évités par préfixes).
    """
    # Pages web (HTML)
    app.include_router(pages_router)
    app.include_router(auth_web_router)
    # API
    app.include_router(auth_api_router)
    app.include_router(paypal_router)
    # Health & monitoring
    app.include_router(health_router)

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
