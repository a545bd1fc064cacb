import uvicorn
from leads_backend.server import configure_logging
from leads_backend.settings import settings

if __name__ == "__main__":

    configure_logging()

    uvicorn.run("leads_backend.server:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower(), reload=settings.DEBUG_MODE != "production", workers=1)
