"""Role table route."""

from deps import APIRouter

from ..schemas import RolesResponse
from ..utils import get_roles

router = APIRouter()


@router.get("/roles", response_model=RolesResponse)
def roles() -> RolesResponse:
    """Validated role table: routes and components per role."""
    return get_roles()
