from bountybot import settings  # load .env
from fastapi import FastAPI, Request, Header, HTTPException
from contextlib import asynccontextmanager

from bountybot.cache.store import CredentialStore
from bountybot.security.webhook_verify import verify_signature
from bountybot.github.events import handle_event
from bountybot.logger import get_logger
from bountybot.settings import validate_github_settings


logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Validate critical configuration early
    validate_github_settings()

    if not settings.GIBWORK_API_KEY:
        logger.warning("GIBWORK_API_KEY is not set; bounties need /setApiKey first")

    yield


def create_app(store: CredentialStore | None = None, **event_options) -> FastAPI:
    """
    Build the webhook app around one credential store.

    `event_options` are passed through to handle_event (collaborator
    factories), which lets tests swap in fakes.
    """
    app = FastAPI(lifespan=lifespan)
    app.state.store = store or CredentialStore(settings.GIBWORK_API_KEY)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.post("/webhook")
    async def github_webhook(
        request: Request,
        x_hub_signature_256: str | None = Header(None),
        x_github_event: str | None = Header(None),
    ):
        body = await request.body()

        if not x_hub_signature_256:
            raise HTTPException(status_code=401, detail="Missing signature header")

        if not verify_signature(body, x_hub_signature_256):
            raise HTTPException(status_code=401, detail="Invalid signature")

        if not x_github_event:
            raise HTTPException(status_code=400, detail="Missing GitHub event header")

        payload = await request.json()
        logger.info("Received GitHub event: %s", x_github_event)

        await handle_event(x_github_event, payload, app.state.store, **event_options)
        return {"status": "ok"}

    return app


app = create_app()


# 👇 This makes `python -m bountybot.main` work
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bountybot.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
    )
