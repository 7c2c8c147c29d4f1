from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from tasklinks.core.database import engine, Base, SessionLocal
from tasklinks.core.config import settings
from tasklinks.core.errors import TaskLinkError
from tasklinks.core.events import (
    EVENT_TASK_LINK_CREATE_UPDATE,
    EVENT_TASK_LINK_DELETE,
    EventDispatcher,
    log_listener,
)
from tasklinks.core.logging_config import configure_logging
from tasklinks.routers import health, relations, tasks, task_links
from tasklinks.services.relation_service import seed_default_relations

configure_logging()

# Init DB
Base.metadata.create_all(bind=engine)

if settings.SEED_DEFAULT_RELATIONS:
    with SessionLocal() as db:
        seed_default_relations(db)

app = FastAPI(
    title="TaskLinks API",
    version="0.1.0"
)

# Events
app.state.events = EventDispatcher()
app.state.events.subscribe(EVENT_TASK_LINK_CREATE_UPDATE, log_listener)
app.state.events.subscribe(EVENT_TASK_LINK_DELETE, log_listener)


@app.exception_handler(TaskLinkError)
async def task_link_error_handler(request: Request, exc: TaskLinkError):
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


# Routes
app.include_router(health.router, prefix="/health")
app.include_router(relations.router)
app.include_router(tasks.router)
app.include_router(task_links.router)
