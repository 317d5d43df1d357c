from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from .logos.views import router as logos
from .namespaces.views import router as namespaces
from .superadmin.views import router as superadmin

router = APIRouter(default_response_class=ORJSONResponse)

router.include_router(logos, prefix="/logos", tags=["logos"])
router.include_router(namespaces, prefix="/namespaces", tags=["namespaces"])
router.include_router(superadmin, prefix="/superadmin", tags=["superadmin"])
