"""Component validation - decide if a resolved component is installable.

Checks run in a fixed order and stop at the first failure:
1. Component exists
2. Component is a reusable component
3. Component has a non-empty remote address
4. Component has an installation method

Store query failures during any check are logged and reported as
store_query_failed instead of being propagated.
"""

import logging
from typing import NoReturn

from .exceptions import ComponentValidationError
from .exceptions import StoreQueryError
from .protocols import MEMBERSHIP
from .protocols import REUSABLE_COMPONENT_CLASS
from .protocols import ComponentRef
from .protocols import KnowledgeStoreProtocol
from .schema import ComponentMetadata
from .schema import FailureReason

logger = logging.getLogger(__name__)


def read_address(store: KnowledgeStoreProtocol, ref: ComponentRef) -> str:
    """Get the component's remote address ("" if it has none).

    Raises:
        StoreQueryError: If the store lookup fails
    """
    address_ref = store.get_address(ref)
    if address_ref is None:
        return ""
    return store.get_link_content(address_ref).strip()


def check_component(store: KnowledgeStoreProtocol, ref: ComponentRef | None) -> ComponentMetadata:
    """
    Validate component and collect its metadata.

    Args:
        store: Knowledge store client
        ref: Component handle (may be None if lookup failed)

    Returns:
        ComponentMetadata of the installable component

    Raises:
        ComponentValidationError: With reason of the first failed check
    """
    try:
        found = ref is not None and store.exists(ref)
        identifier = store.get_identifier(ref) if found else ""
    except StoreQueryError as e:
        logger.error(f"Failed to look up component: {e}")
        _reject(f"Component lookup failed: {e}", FailureReason.STORE_QUERY_FAILED)

    if not found:
        _reject("Component not found. Unable to install", FailureReason.NOT_FOUND)

    context = {"identifier": identifier}

    try:
        reusable_class = store.find_by_identifier(REUSABLE_COMPONENT_CLASS)
        reusable = reusable_class is not None and store.has_relation(MEMBERSHIP, reusable_class, ref)
    except StoreQueryError as e:
        logger.error(f"Failed to check reusable tag of '{identifier}': {e}")
        _reject(f"Component '{identifier}' reusable check failed: {e}", FailureReason.STORE_QUERY_FAILED, context)

    if not reusable:
        _reject(f"Component '{identifier}' is not a reusable component", FailureReason.NOT_REUSABLE, context)

    try:
        address = read_address(store, ref)
    except StoreQueryError as e:
        logger.error(f"Failed to read address of '{identifier}': {e}")
        _reject(f"Component '{identifier}' address lookup failed: {e}", FailureReason.STORE_QUERY_FAILED, context)

    if not address:
        _reject(f"Component '{identifier}' address not found", FailureReason.ADDRESS_MISSING, context)

    try:
        installation_method = store.get_installation_method(ref)
    except StoreQueryError as e:
        logger.error(f"Failed to read installation method of '{identifier}': {e}")
        _reject(
            f"Component '{identifier}' installation method lookup failed: {e}",
            FailureReason.STORE_QUERY_FAILED,
            context,
        )

    if installation_method is None or not store.exists(installation_method):
        _reject(
            f"Component '{identifier}' installation method not found",
            FailureReason.INSTALLATION_METHOD_MISSING,
            context,
        )

    return ComponentMetadata(
        identifier=identifier,
        address=address,
        installation_method=installation_method,
    )


def validate_component(store: KnowledgeStoreProtocol, ref: ComponentRef | None) -> bool:
    """Check if component is installable (rejection reasons are logged)."""
    try:
        check_component(store, ref)
    except ComponentValidationError:
        return False
    return True


def _reject(message: str, reason: FailureReason, context: dict | None = None) -> NoReturn:
    logger.warning(message)
    raise ComponentValidationError(message, reason=reason, context=context)
