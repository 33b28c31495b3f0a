# storefront/services/authz.py
from storefront.domain.errors import Forbidden
from storefront.services.token_service import Identity


def assert_owner_or_admin(owner_id: int, caller: Identity, resource: str = "resource") -> None:
    """Wspolny guard dla mutacji i odczytow zasobow nalezacych do uzytkownika."""
    if caller.is_admin or caller.subject_id == owner_id:
        return
    raise Forbidden(f"You do not have access to this {resource}")


def assert_admin(caller: Identity) -> None:
    if not caller.is_admin:
        raise Forbidden("Admin privileges required")
