from fastapi import APIRouter

# landing page of the service
DefaultRouter = APIRouter()


@DefaultRouter.get("/")
async def helloWorld():
    return {"service": "Rate Engine", "docs": "/docs", "api": "/api/v1"}
