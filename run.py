import uvicorn

from app.config import settings

# Determine environment: "prod" or "local"
ENV = settings.ENV.lower()

# Default settings
HOST = settings.HOST
PORT = settings.PORT
RELOAD = True  # Enable live reload in local development

# Production config
if ENV == "prod":
    HOST = "0.0.0.0"
    RELOAD = False

# Start the FastAPI app
if __name__ == "__main__":
    uvicorn.run("app.main:app", host=HOST, port=PORT, reload=RELOAD)
