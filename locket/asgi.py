"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn -k uvicorn.workers.UvicornWorker) importe `locket.asgi:app`.
- Toute la configuration FastAPI (routes, middlewares, sécurité, static) est centralisée
  dans locket.app_setup.factory; ce fichier ne fait qu’exposer l’instance `app`.
"""

from locket.app_setup.factory import create_app

app = create_app()
