"""Customer creation — command and handler."""

from protean import handle
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity


@identity.command(part_of="Customer")
class CreateCustomer:
    """Create a customer profile for an email address."""

    email: String(required=True, max_length=254)
    has_account: Boolean(default=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    phone: String(max_length=20)


@identity.command_handler(part_of=Customer)
class CreateCustomerHandler:
    @handle(CreateCustomer)
    def create_customer(self, command):
        customer = Customer.create(
            email=command.email,
            has_account=command.has_account,
            first_name=command.first_name,
            last_name=command.last_name,
            phone=command.phone,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)
