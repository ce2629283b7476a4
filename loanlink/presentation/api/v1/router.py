from fastapi import APIRouter

from .applications import application_router
from .health import health_router
from .loans import loan_router
from .payments import payment_router
from .users import user_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(user_router, tags=["Users"])
router.include_router(loan_router, tags=["Loans"])
router.include_router(application_router, tags=["Applications"])
router.include_router(payment_router, tags=["Payments"])
