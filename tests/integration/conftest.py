import pytest
import pytest_asyncio
from datetime import date, timedelta
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from config import ApplicationConfig
from src.depends import get_session
from src.adapter.services.database import Database
from src.adapter.repositories import (
    SqlAlchemyAreaRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyProductRepository,
)
from src.domain.area import Area
from src.domain.customer import Customer
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.product import Product, ProductUnit


class IntegrationConfig(ApplicationConfig):
    AUTH_DISABLED = True
    API_PREFIX = "/api/v1"
    CORS_ORIGINS = []
    BCRYPT_ROUNDS = 4
    JWT_SECRET = "integration-test-secret"


class AuthIntegrationConfig(IntegrationConfig):
    AUTH_DISABLED = False


@pytest_asyncio.fixture(scope="function")
async def database(tmp_path):
    """Fresh SQLite database file per test"""
    database = Database(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await database.connect(create_tables=True)

    yield database

    await database.disconnect()


@pytest_asyncio.fixture
async def db_session(database):
    """Create a new database session for each test"""
    async with database.session() as session:
        yield session


async def _make_client(config, database, db_session):
    from src.api.app import create_app

    app = create_app(config, database=database)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(database, db_session):
    """Test client with authentication disabled (requests act as admin)"""
    async with await _make_client(IntegrationConfig, database, db_session) as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_client(database, db_session):
    """Test client enforcing bearer tokens"""
    async with await _make_client(AuthIntegrationConfig, database, db_session) as ac:
        yield ac


@pytest_asyncio.fixture
async def area(db_session):
    area = await SqlAlchemyAreaRepository(db_session).create(Area(name="Kothrud", code="KTH"))
    await db_session.commit()
    return area


@pytest_asyncio.fixture
async def product(db_session):
    product = await SqlAlchemyProductRepository(db_session).create(
        Product(
            product_code="MILK-1L",
            product_name="Cow Milk 1L",
            unit=ProductUnit.LITRE,
            price_per_unit=Decimal("60.00"),
        )
    )
    await db_session.commit()
    return product


@pytest_asyncio.fixture
async def customer(db_session, area):
    customer = await SqlAlchemyCustomerRepository(db_session).create(
        Customer(
            customer_code="CUST-00001",
            full_name="Asha Patil",
            phone="9876500001",
            area_id=area.id,
            address_line1="14 Karve Road",
            city="Pune",
            pincode="411038",
        )
    )
    await db_session.commit()
    return customer


@pytest.fixture
def make_invoice(db_session):
    """Factory persisting an open invoice for a customer"""
    invoice_repo = SqlAlchemyInvoiceRepository(db_session)
    created = []

    async def factory(customer_id, total, due_in_days=0, status=InvoiceStatus.SENT):
        total = Decimal(total)
        sequence = len(created) + 1
        invoice = await invoice_repo.create(
            Invoice(
                invoice_number=f"INV-TEST-{sequence:06d}",
                customer_id=customer_id,
                status=status,
                billing_period_start=date(2024, 1, 1),
                billing_period_end=date(2024, 1, 31),
                due_date=date.today() + timedelta(days=due_in_days),
                subtotal=total,
                total_amount=total,
                paid_amount=Decimal("0"),
                balance_amount=total,
            )
        )
        await db_session.commit()
        created.append(invoice)
        return invoice

    return factory
