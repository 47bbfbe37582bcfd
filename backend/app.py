"""
Entry point of the slice upload service.
Browser clients POST a file slice by slice to /api/upload; each slice is
appended to a hidden partial file and the last one moves it into the upload
directory, from where it is served back under the static prefix.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import register_routes
from config import PORT, load_upload_config
from logging_config import setup_logger

log = setup_logger()

app = FastAPI(title="Slice upload backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_routes(app, log, load_upload_config())

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=PORT, reload=True)
