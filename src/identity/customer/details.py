"""Customer details management — command and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity


@identity.command(part_of="Customer")
class UpdateCustomer:
    """Change a customer's name, phone or metadata. Omitted fields stay as they are."""

    customer_id: Identifier(required=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    phone: String(max_length=20)
    metadata: Text()  # JSON object, merged into existing metadata


@identity.command_handler(part_of=Customer)
class UpdateCustomerHandler:
    @handle(UpdateCustomer)
    def update_customer(self, command):
        changes = {
            field: getattr(command, field)
            for field in ("first_name", "last_name", "phone")
            if getattr(command, field) is not None
        }
        if command.metadata:
            changes["metadata"] = json.loads(command.metadata)

        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        customer.update_details(**changes)
        repo.add(customer)
        return str(customer.id)
