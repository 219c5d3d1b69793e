from .create_customer import CreateCustomer
from .delete_customer import DeleteCustomer
from .get_customer import GetCustomer
from .list_customers import ListCustomers
from .update_customer import UpdateCustomer
from .dtos import (
    CreateCustomerCommandDTO,
    UpdateCustomerCommandDTO,
    CustomerResponseDTO,
    CustomerListResponseDTO,
)

__all__ = [
    "CreateCustomer",
    "DeleteCustomer",
    "GetCustomer",
    "ListCustomers",
    "UpdateCustomer",
    "CreateCustomerCommandDTO",
    "UpdateCustomerCommandDTO",
    "CustomerResponseDTO",
    "CustomerListResponseDTO",
]
