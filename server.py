"""
Document Quiz Server - FastAPI host do Document Quiz Engine

- POST /api/generate-quiz: documento -> quiz validado
- POST /api/analyze-results: respostas -> pontuacao + relatorio
- Erros sempre como {"error": "..."}
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docquiz.config import get_config
from docquiz.router import register_exception_handlers, router

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title="Document Quiz",
    description="Quiz cronometrado gerado a partir de um documento, com analise de desempenho",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(router)


@app.get("/")
async def root():
    return {"status": "ok", "service": "docquiz"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server:app", host="0.0.0.0", port=8001, reload=False)
