# main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .errors import ElectionError
from .routes.auth_routes import router as auth_router
from .routes.election_routes import router as election_router
from .routes.event_routes import router as event_router
from .routes.proposal_routes import router as proposal_router
from .routes.vote_routes import vote_router
from .routes.voter_routes import router as voter_router

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="BALLOTBOX - Governance Election API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(election_router)
app.include_router(voter_router)
app.include_router(proposal_router)
app.include_router(vote_router)
app.include_router(event_router)


@app.exception_handler(ElectionError)
async def election_error_handler(request: Request, exc: ElectionError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health", tags=["Root"])
async def health_check():
    return {"status": "healthy", "storage": config.STORAGE_BACKEND}


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Welcome to the BALLOTBOX Governance Election API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
