from src.domain.customer import Customer
from .dtos import CustomerResponseDTO


def to_customer_response(customer: Customer) -> CustomerResponseDTO:
    return CustomerResponseDTO(
        customer_id=customer.id,
        customer_code=customer.customer_code,
        full_name=customer.full_name,
        phone=customer.phone,
        email=customer.email,
        area_id=customer.area_id,
        address_line1=customer.address_line1,
        address_line2=customer.address_line2,
        city=customer.city,
        pincode=customer.pincode,
        location_notes=customer.location_notes,
        status=customer.status,
        joining_date=customer.joining_date,
        created_at=customer.created_at,
    )
