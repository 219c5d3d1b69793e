from .areas import (
    CreateArea,
    ListAreas,
    GetArea,
    UpdateArea,
    DeleteArea,
    ListAreaPersonnel,
    AssignAreaPersonnel,
    RemoveAreaPersonnel,
)
from .products import CreateProduct, ListProducts, GetProduct, UpdateProduct, DeleteProduct
from .dtos import (
    CreateAreaCommandDTO,
    UpdateAreaCommandDTO,
    AreaResponseDTO,
    AreaDetailDTO,
    AssignPersonnelCommandDTO,
    AreaPersonnelDTO,
    CreateProductCommandDTO,
    UpdateProductCommandDTO,
    ProductResponseDTO,
)

__all__ = [
    "CreateArea",
    "ListAreas",
    "GetArea",
    "UpdateArea",
    "DeleteArea",
    "ListAreaPersonnel",
    "AssignAreaPersonnel",
    "RemoveAreaPersonnel",
    "CreateProduct",
    "ListProducts",
    "GetProduct",
    "UpdateProduct",
    "DeleteProduct",
    "CreateAreaCommandDTO",
    "UpdateAreaCommandDTO",
    "AreaResponseDTO",
    "AreaDetailDTO",
    "AssignPersonnelCommandDTO",
    "AreaPersonnelDTO",
    "CreateProductCommandDTO",
    "UpdateProductCommandDTO",
    "ProductResponseDTO",
]
