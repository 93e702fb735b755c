# app/main.py
import logging

from fastapi import FastAPI

from .blog import blog_router
from .config import get_settings


logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Blog Index",
    description=(
        "Serves the data for a blog index page: posts, categories and tags "
        "from a headless WordPress (WPGraphQL) site, searchable, filterable "
        "and paginated in memory."
    ),
    version="1.0.0",
)

app.include_router(blog_router)


# 🔹 Route de base pour tester rapidement
@app.get("/")
def health_check():
    return {"status": "ok", "message": "Blog index live 🚀"}
