"""Core tables for the commerce entities served by the generic CRUD routes."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    func,
)

from storefront.models.base import Base

metadata = Base.metadata


def _created_at() -> Column:
    return Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now())


def _updated_at() -> Column:
    return Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


brands = Table(
    "brands",
    metadata,
    Column("brand_id", Integer, primary_key=True, autoincrement=True),
    Column("brand_name", String(255), nullable=False, unique=True),
    _created_at(),
)

categories = Table(
    "categories",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("category_name", String(255), nullable=False, unique=True),
    Column("description", Text),
    _created_at(),
)

products = Table(
    "products",
    metadata,
    Column("product_id", Integer, primary_key=True, autoincrement=True),
    Column("product_name", String(255), nullable=False),
    Column("brand_id", Integer, ForeignKey("brands.brand_id")),
    Column("category_id", Integer, ForeignKey("categories.category_id")),
    Column("price", Numeric(12, 2), nullable=False),
    Column("discount_price", Numeric(12, 2)),
    Column("description", Text),
    Column("specifications", Text),
    _created_at(),
    _updated_at(),
)

product_images = Table(
    "product_images",
    metadata,
    Column("image_id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, ForeignKey("products.product_id", ondelete="CASCADE"), nullable=False),
    Column("image_url", String(1024), nullable=False),
    Column("is_primary", Boolean, nullable=False, default=False),
    _created_at(),
)

customers = Table(
    "customers",
    metadata,
    Column("customer_id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255)),
    Column("full_name", String(255)),
    Column("birth_date", Date),
    Column("gender", String(16)),
    Column("phone", String(32)),
    Column("address", Text),
    _created_at(),
    _updated_at(),
)

reviews = Table(
    "reviews",
    metadata,
    Column("review_id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.customer_id")),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("rating", Integer, nullable=False),
    Column("comment", Text),
    _created_at(),
)

carts = Table(
    "carts",
    metadata,
    Column("cart_id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.customer_id"), nullable=False),
    _created_at(),
    _updated_at(),
)

cart_items = Table(
    "cart_items",
    metadata,
    Column("cart_item_id", Integer, primary_key=True, autoincrement=True),
    Column("cart_id", Integer, ForeignKey("carts.cart_id", ondelete="CASCADE"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("quantity", Integer, nullable=False, default=1),
)

warehouses = Table(
    "warehouses",
    metadata,
    Column("warehouse_id", Integer, primary_key=True, autoincrement=True),
    Column("warehouse_name", String(255), nullable=False),
    Column("location", String(1024)),
    _created_at(),
)

inventory = Table(
    "inventory",
    metadata,
    Column("inventory_id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("warehouse_id", Integer, ForeignKey("warehouses.warehouse_id"), nullable=False),
    Column("stock", Integer, nullable=False, default=0),
    Column(
        "last_updated",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)

suppliers = Table(
    "suppliers",
    metadata,
    Column("supplier_id", Integer, primary_key=True, autoincrement=True),
    Column("supplier_name", String(255), nullable=False),
    Column("contact_name", String(255)),
    Column("phone", String(32)),
    Column("email", String(255)),
    Column("address", Text),
    _created_at(),
)

import_invoices = Table(
    "import_invoices",
    metadata,
    Column("invoice_id", Integer, primary_key=True, autoincrement=True),
    Column("supplier_id", Integer, ForeignKey("suppliers.supplier_id"), nullable=False),
    Column("staff_id", Integer, ForeignKey("users.account_id")),
    Column("total_amount", Numeric(14, 2), nullable=False, default=0),
    Column("invoice_date", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("warehouse_id", Integer, ForeignKey("warehouses.warehouse_id")),
    _created_at(),
)

import_invoice_details = Table(
    "import_invoice_details",
    metadata,
    Column("detail_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "invoice_id",
        Integer,
        ForeignKey("import_invoices.invoice_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
)

payment_methods = Table(
    "payment_methods",
    metadata,
    Column("method_id", Integer, primary_key=True, autoincrement=True),
    Column("method_name", String(255), nullable=False, unique=True),
    Column("description", Text),
    Column("is_active", Boolean, nullable=False, default=True),
    _created_at(),
)

shipping_methods = Table(
    "shipping_methods",
    metadata,
    Column("shipping_method_id", Integer, primary_key=True, autoincrement=True),
    Column("method_name", String(255), nullable=False, unique=True),
    Column("cost", Numeric(12, 2), nullable=False, default=0),
    Column("estimated_delivery_time", String(255)),
    Column("is_active", Boolean, nullable=False, default=True),
    _created_at(),
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.customer_id"), nullable=False),
    Column("staff_id", Integer, ForeignKey("users.account_id")),
    Column("total_amount", Numeric(14, 2), nullable=False, default=0),
    Column("order_status", String(32), nullable=False, default="pending"),
    Column("shipping_method_id", Integer, ForeignKey("shipping_methods.shipping_method_id")),
    Column("shipping_address", Text),
    Column("method_id", Integer, ForeignKey("payment_methods.method_id")),
    Column("payment_status", String(32), nullable=False, default="unpaid"),
    _created_at(),
    _updated_at(),
)

order_details = Table(
    "order_details",
    metadata,
    Column("detail_id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("warehouse_id", Integer, ForeignKey("warehouses.warehouse_id")),
)

promotions = Table(
    "promotions",
    metadata,
    Column("promotion_id", Integer, primary_key=True, autoincrement=True),
    Column("promotion_code", String(64), nullable=False, unique=True),
    Column("description", Text),
    Column("discount_type", String(16), nullable=False),
    Column("discount_value", Numeric(12, 2), nullable=False),
    Column("min_order_value", Numeric(12, 2)),
    Column("start_date", DateTime(timezone=True)),
    Column("end_date", DateTime(timezone=True)),
    Column("is_active", Boolean, nullable=False, default=True),
    _created_at(),
    _updated_at(),
)

order_promotions = Table(
    "order_promotions",
    metadata,
    Column("order_promotion_id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False),
    Column("promotion_id", Integer, ForeignKey("promotions.promotion_id"), nullable=False),
    Column("applied_discount", Numeric(12, 2), nullable=False, default=0),
)

transactions = Table(
    "transactions",
    metadata,
    Column("transaction_id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.order_id"), nullable=False),
    Column("method_id", Integer, ForeignKey("payment_methods.method_id")),
    Column("amount", Numeric(14, 2), nullable=False),
    Column("transaction_status", String(32), nullable=False, default="pending"),
    Column("transaction_date", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("transaction_code", String(128), unique=True),
)

audit_logs = Table(
    "audit_logs",
    metadata,
    Column("log_id", Integer, primary_key=True, autoincrement=True),
    Column("table_name", String(64), nullable=False),
    Column("action", String(32), nullable=False),
    Column("record_id", Integer),
    Column("staff_id", Integer, ForeignKey("users.account_id")),
    Column("details", Text),
    _created_at(),
)
