import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from config import settings
from database import db
from errors import InvalidRequestError, NotFoundError
from forum import DOWNVOTE, UPVOTE, ForumService, author_snapshot
from lawyers import LawyerDirectory
from notifications import ChannelHub, NullNotifier, WebSocketNotifier, topic_channel
from resources import ResourceLibrary
from schemas import ProfileUpdate, ReplyCreate, TopicCreate, User
from seed import (
    RESOURCE_CATEGORIES,
    RESOURCE_FILE_URLS,
    seed_forum_categories,
    seed_lawyers,
    seed_resources,
    seed_topics,
    seed_users,
)
from store import (
    InMemoryResourceRepository,
    InMemoryTopicRepository,
    MongoResourceRepository,
    MongoTopicRepository,
    topic_to_document,
)
from users import UserStore

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---------- Wiring ----------

hub = ChannelHub()
notifier = WebSocketNotifier(hub) if settings.notifications_enabled else NullNotifier()

if db is not None:
    topic_repo = MongoTopicRepository(db)
    resource_repo = MongoResourceRepository(db, seed=seed_resources())
else:
    topic_repo = InMemoryTopicRepository(seed_topics())
    resource_repo = InMemoryResourceRepository(seed_resources())

forum = ForumService(topic_repo, notifier, seed_forum_categories(), settings.max_reply_depth)
library = ResourceLibrary(resource_repo, RESOURCE_FILE_URLS, RESOURCE_CATEGORIES)
directory = LawyerDirectory(seed_lawyers())
user_store = UserStore(seed_users())


def get_forum() -> ForumService:
    return forum


def get_library() -> ResourceLibrary:
    return library


def get_directory() -> LawyerDirectory:
    return directory


def get_users() -> UserStore:
    return user_store


def get_hub() -> ChannelHub:
    return hub


def current_user(
    x_user_id: Optional[str] = Header(None),
    users: UserStore = Depends(get_users),
) -> Optional[User]:
    return users.find(x_user_id)


def require_user(user: Optional[User] = Depends(current_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authorized")
    return user


# ---------- Seed Data ----------

def seed_database():
    if db is None:
        return
    if db["topic"].count_documents({}) == 0:
        db["topic"].insert_many([topic_to_document(t) for t in seed_topics()])
        logger.info("Seeded topic collection")
    if resource_repo.ensure_seeded():
        logger.info("Seeded resource collection")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        seed_database()
    except Exception as e:
        logger.error(f"Database seeding failed: {e}")
    yield


app = FastAPI(title="LegalConnect API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Utilities ----------

def ok(data, **extra) -> dict:
    return {"success": True, **extra, "data": data}


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"success": False, "message": exc.message})


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"success": False, "message": exc.message})


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = {"success": False, "message": "Server error"}
    if not settings.is_production:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


# ---------- Basic ----------

@app.get("/")
def root():
    return {"name": "LegalConnect API", "status": "ok"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "ℹ️ In-memory store",
        "notifications": "✅ Enabled" if settings.notifications_enabled else "❌ Disabled",
        "sockets": hub.connection_count,
        "collections": [],
    }
    try:
        if db is not None:
            response["database"] = "✅ Connected"
            response["collections"] = db.list_collection_names()
    except Exception as e:
        response["database"] = f"⚠️ {str(e)[:80]}"
    return response


# ---------- Community topics ----------

@app.get("/api/community/topics")
def list_topics(service: ForumService = Depends(get_forum)):
    topics = service.list_topics()
    return ok(topics, count=len(topics))


@app.get("/api/community/categories")
def list_forum_categories(service: ForumService = Depends(get_forum)):
    return ok([c.model_dump() for c in service.list_categories()])


@app.get("/api/community/topics/{topic_id}")
def get_topic(topic_id: str, service: ForumService = Depends(get_forum)):
    return ok(service.get_topic(topic_id))


@app.post("/api/community/topics", status_code=201)
def create_topic(
    data: TopicCreate,
    user: Optional[User] = Depends(current_user),
    service: ForumService = Depends(get_forum),
):
    topic = service.create_topic(
        data.title,
        data.category,
        data.content,
        data.anonymous,
        author_snapshot(user),
    )
    return ok(topic)


@app.post("/api/community/topics/{topic_id}/replies")
def add_reply(
    topic_id: str,
    data: ReplyCreate,
    user: Optional[User] = Depends(current_user),
    service: ForumService = Depends(get_forum),
):
    reply = service.add_reply(
        topic_id,
        data.content,
        data.parent_id,
        data.anonymous,
        author_snapshot(user, anonymous=data.anonymous),
    )
    return ok(reply)


# ---------- Voting ----------

@app.put("/api/community/topics/{topic_id}/upvote")
def upvote_topic(topic_id: str, service: ForumService = Depends(get_forum)):
    score = service.vote_topic(topic_id, UPVOTE)
    return ok({"message": f"Upvote for topic ID: {topic_id} registered", "voteScore": score})


@app.put("/api/community/topics/{topic_id}/downvote")
def downvote_topic(topic_id: str, service: ForumService = Depends(get_forum)):
    score = service.vote_topic(topic_id, DOWNVOTE)
    return ok({"message": f"Downvote for topic ID: {topic_id} registered", "voteScore": score})


@app.put("/api/community/topics/{topic_id}/replies/{reply_id}/upvote")
def upvote_reply(topic_id: str, reply_id: str, service: ForumService = Depends(get_forum)):
    score = service.vote_reply(topic_id, reply_id, UPVOTE)
    return ok({
        "message": f"Upvote for reply ID: {reply_id} in topic ID: {topic_id} registered",
        "voteScore": score,
    })


@app.put("/api/community/topics/{topic_id}/replies/{reply_id}/downvote")
def downvote_reply(topic_id: str, reply_id: str, service: ForumService = Depends(get_forum)):
    score = service.vote_reply(topic_id, reply_id, DOWNVOTE)
    return ok({
        "message": f"Downvote for reply ID: {reply_id} in topic ID: {topic_id} registered",
        "voteScore": score,
    })


# ---------- Resources ----------

@app.get("/api/resources")
def list_resources(
    category: Optional[str] = None,
    type: Optional[str] = None,
    search: Optional[str] = None,
    service: ResourceLibrary = Depends(get_library),
):
    items = [r.model_dump() for r in service.list_resources(category, type, search)]
    return ok(items, count=len(items))


@app.get("/api/resources/categories")
def list_resource_categories(service: ResourceLibrary = Depends(get_library)):
    return ok(service.list_categories())


@app.get("/api/resources/{resource_id}")
def get_resource(resource_id: str, service: ResourceLibrary = Depends(get_library)):
    return ok(service.get_resource(resource_id).model_dump())


@app.put("/api/resources/{resource_id}/view")
def increment_view(resource_id: str, service: ResourceLibrary = Depends(get_library)):
    views = service.record_view(resource_id)
    return {
        "success": True,
        "views": views,
        "message": f"View count incremented for resource ID: {resource_id}",
    }


@app.put("/api/resources/{resource_id}/download")
def increment_download(resource_id: str, service: ResourceLibrary = Depends(get_library)):
    downloads = service.record_download(resource_id)
    return {
        "success": True,
        "downloads": downloads,
        "message": f"Download count incremented for resource ID: {resource_id}",
    }


@app.get("/api/resources/{resource_id}/file")
def get_resource_file(resource_id: str, service: ResourceLibrary = Depends(get_library)):
    return RedirectResponse(service.resolve_file_url(resource_id), status_code=302)


# ---------- Lawyers ----------

@app.get("/api/lawyers")
def list_lawyers(
    practiceArea: Optional[str] = None,
    serviceType: Optional[str] = None,
    city: Optional[str] = None,
    language: Optional[str] = None,
    search: Optional[str] = None,
    service: LawyerDirectory = Depends(get_directory),
):
    items = service.list_lawyers(practiceArea, serviceType, city, language, search)
    return ok([l.model_dump(by_alias=True) for l in items], count=len(items))


@app.get("/api/lawyers/{lawyer_id}")
def get_lawyer(lawyer_id: str, service: LawyerDirectory = Depends(get_directory)):
    return ok(service.get_lawyer(lawyer_id).model_dump(by_alias=True))


# ---------- User profile ----------

@app.get("/api/users/profile")
def get_profile(user: User = Depends(require_user)):
    return ok(user.model_dump(by_alias=True))


@app.put("/api/users/profile")
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(require_user),
    users: UserStore = Depends(get_users),
):
    updated = users.update_profile(user.id, data)
    return ok(updated.model_dump(by_alias=True))


# ---------- Live updates ----------

@app.websocket("/ws/community")
async def community_socket(websocket: WebSocket, hub: ChannelHub = Depends(get_hub)):
    await hub.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                message = None
            if not isinstance(message, dict):
                await websocket.send_json({"event": "error", "data": {"message": "Invalid message"}})
                continue
            action = message.get("action")
            topic_id = message.get("topicId")
            if action not in ("join-topic", "leave-topic") or not topic_id:
                await websocket.send_json({"event": "error", "data": {"message": "Unknown action"}})
                continue
            channel = topic_channel(str(topic_id))
            if action == "join-topic":
                hub.join(websocket, channel)
                await websocket.send_json({"event": "joined", "data": {"channel": channel}})
            else:
                hub.leave(websocket, channel)
                await websocket.send_json({"event": "left", "data": {"channel": channel}})
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
