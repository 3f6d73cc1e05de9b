"""FastAPI endpoints for storefront signup, login and the customer's own account."""

import json

import structlog
from fastapi import APIRouter, Depends, HTTPException
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from identity.api.dependencies import require_customer_id
from identity.api.schemas import (
    CustomerEnvelope,
    CustomerResponse,
    LoginRequest,
    RegisterCustomerRequest,
    RegisterCustomerResponse,
    TokenResponse,
    UpdateCustomerRequest,
)
from identity.auth.auth_identity import AuthIdentity
from identity.auth.authentication import AuthenticationFailed, authenticate_emailpass, issue_token
from identity.auth.passwords import hash_password
from identity.auth.registration import RegisterEmailpassIdentity
from identity.customer.auth_events import PROFILE_FIELDS
from identity.customer.customer import Customer
from identity.customer.details import UpdateCustomer

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["customers"])


@router.post("/store/customers", status_code=201, response_model=RegisterCustomerResponse)
async def register_customer(body: RegisterCustomerRequest) -> RegisterCustomerResponse:
    profile = {field: getattr(body, field) for field in PROFILE_FIELDS if getattr(body, field)}
    try:
        command = RegisterEmailpassIdentity(
            email=body.email,
            password_hash=hash_password(body.password),
            user_metadata=json.dumps(profile),
        )
        auth_identity_id = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc

    # With synchronous event processing the customer is already linked (and
    # carries the profile) here; otherwise both happen once the Engine has
    # delivered AuthIdentityCreated and AppMetadataUpdated.
    auth_identity = current_domain.repository_for(AuthIdentity).get(auth_identity_id)
    customer_id = auth_identity.app_metadata_map.get("customer_id")
    if not customer_id:
        logger.info("Customer link pending for new auth identity", auth_identity_id=auth_identity_id)

    return RegisterCustomerResponse(auth_identity_id=auth_identity_id, customer_id=customer_id)


@router.post("/auth/customer/emailpass", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    try:
        auth_identity = authenticate_emailpass(body.email, body.password)
    except AuthenticationFailed as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return TokenResponse(token=issue_token(auth_identity))


def _load_customer(customer_id: str) -> Customer:
    try:
        return current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Customer not found") from exc


@router.get("/store/customers/me", response_model=CustomerEnvelope)
async def get_my_customer(customer_id: str = Depends(require_customer_id)) -> CustomerEnvelope:
    return CustomerEnvelope(customer=CustomerResponse.from_customer(_load_customer(customer_id)))


@router.post("/store/customers/me", response_model=CustomerEnvelope)
async def update_my_customer(
    body: UpdateCustomerRequest,
    customer_id: str = Depends(require_customer_id),
) -> CustomerEnvelope:
    _load_customer(customer_id)
    command = UpdateCustomer(
        customer_id=customer_id,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        metadata=json.dumps(body.metadata) if body.metadata is not None else None,
    )
    try:
        current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc
    return CustomerEnvelope(customer=CustomerResponse.from_customer(_load_customer(customer_id)))
