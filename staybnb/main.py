import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from staybnb.database import Base, engine
from staybnb.errors import register_exception_handlers
from staybnb.middleware import add_request_id_and_process_time
from staybnb.models import booking_model, image_model, review_model, spot_model, token_blacklist, user_model  # noqa: F401
from staybnb.routes.user_route import user_router
from staybnb.routes.spot_route import spot_router
from staybnb.routes.image_route import image_router
from staybnb.routes.booking_route import booking_router
from staybnb.routes.review_route import review_router


Base.metadata.create_all(bind=engine)
app = FastAPI(
    title="Staybnb API",
    version="1.0.0",
    description="API for a vacation rental platform called Staybnb, letting hosts list spots and guests book stays and leave reviews.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in os.environ.get("CORS_ORIGINS", "*").split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(add_request_id_and_process_time)
register_exception_handlers(app)


@app.get("/", status_code=200)
async def home():
    return {"message": "Welcome to Staybnb REST API Project"}


app.include_router(user_router, prefix="/api", tags=["Users"])
app.include_router(spot_router, prefix="/api", tags=["Spots"])
app.include_router(image_router, prefix="/api", tags=["Images"])
app.include_router(booking_router, prefix="/api", tags=["Bookings"])
app.include_router(review_router, prefix="/api", tags=["Reviews"])
