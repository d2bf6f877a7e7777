from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gocyclo.routers import analysis

app = FastAPI(
    title="gocyclo",
    description="Cyclomatic complexity of Go functions and methods, most complex first.",
    version="1.0.0"
)

# Report viewers are served from other origins during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(analysis.router)


@app.get("/api-status")
async def status():
    return {"status": "ok", "root": str(analysis.ROOT_PATH)}
