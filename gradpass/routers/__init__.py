from gradpass.routers.issuers import router as issuers_router
from gradpass.routers.tickets import router as tickets_router
from gradpass.routers.validation import router as validation_router

__all__ = [
    "issuers_router",
    "tickets_router",
    "validation_router"
]
