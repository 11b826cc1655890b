"""Auth: cosmetic login gate for the admin and pharmacist panels.

No token is issued and no route requires one. The check only decides which
panel the front-end opens.
"""
import hmac

from fastapi import APIRouter, Depends

from clinicdesk.api.deps import get_state
from clinicdesk.core.audit import AuditLog
from clinicdesk.core.exceptions import BusinessError
from clinicdesk.schemas.auth import LoginRequest, LoginResponse, UserRole
from clinicdesk.services import scheduling_service
from clinicdesk.services.state import AppState

router = APIRouter()


def _matches(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode(), expected.encode())


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, state: AppState = Depends(get_state)):
    """Check credentials for the requested role. Generic 401 on any mismatch."""
    if data.role == UserRole.ADMIN:
        creds = state.admin_credentials
        if _matches(data.username, creds.username) and _matches(data.password, creds.password):
            AuditLog.log_authentication(data.role.value, data.username, True)
            return LoginResponse(role=UserRole.ADMIN, name="Admin User")
        AuditLog.log_authentication(data.role.value, data.username, False, reason="Bad admin credentials")
        raise BusinessError.unauthorized("admin login")

    pharmacist = scheduling_service.find_pharmacist_login(state, data.username)
    if pharmacist and pharmacist.password and _matches(data.password, pharmacist.password):
        AuditLog.log_authentication(data.role.value, data.username, True)
        return LoginResponse(role=UserRole.PHARMACIST, name=pharmacist.name)
    AuditLog.log_authentication(data.role.value, data.username, False, reason="Unknown user or bad password")
    raise BusinessError.unauthorized("pharmacist login")
