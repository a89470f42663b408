"""
Montage des fichiers statiques (CSS, scripts du checkout) sur /static.
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from locket import config

def mount_static_files(app: FastAPI) -> None:
    app.mount("/static", StaticFiles(directory=str(config.PUBLIC_DIR)), name="static")
