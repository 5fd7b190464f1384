"""
Filedrop
- POST /api/upload : store one or more files (multipart field "files")
- GET /api/files : list stored files with name/content search and pagination
- GET/DELETE /api/files/{id} : download or delete by identifier
File metadata lives only in the stored file names; see services/naming.py.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from filedrop.api.routes.files import router as files_router
from filedrop.core.errors import FiledropError
from filedrop.core.logging import configure_logging

app = FastAPI(title="Filedrop", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

configure_logging()

@app.exception_handler(FiledropError)
async def filedrop_error_handler(request: Request, exc: FiledropError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.get("/")
def index():
    return "File Upload API"

# APIs
app.include_router(files_router, prefix="/api", tags=["files"])

@app.get("/health")
def health():
    return {"status": "ok"}
