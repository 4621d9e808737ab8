"""Add commerce tables (catalog, customers, orders, inventory, purchasing).

Revision ID: 20261019010000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019010000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Drop order is the reverse of creation (children before parents).
TABLES = (
    "brands",
    "categories",
    "products",
    "product_images",
    "customers",
    "reviews",
    "carts",
    "cart_items",
    "warehouses",
    "inventory",
    "suppliers",
    "import_invoices",
    "import_invoice_details",
    "payment_methods",
    "shipping_methods",
    "orders",
    "order_details",
    "promotions",
    "order_promotions",
    "transactions",
    "audit_logs",
)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )


def _pk(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), primary_key=True, autoincrement=True)


def upgrade() -> None:
    op.create_table(
        "brands",
        _pk("brand_id"),
        sa.Column("brand_name", sa.String(255), nullable=False, unique=True),
        _created_at(),
    )
    op.create_table(
        "categories",
        _pk("category_id"),
        sa.Column("category_name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        _created_at(),
    )
    op.create_table(
        "products",
        _pk("product_id"),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("brand_id", sa.Integer(), sa.ForeignKey("brands.brand_id")),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.category_id")),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount_price", sa.Numeric(12, 2)),
        sa.Column("description", sa.Text()),
        sa.Column("specifications", sa.Text()),
        _created_at(),
        _updated_at(),
    )
    op.create_table(
        "product_images",
        _pk("image_id"),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.product_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("image_url", sa.String(1024), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_table(
        "customers",
        _pk("customer_id"),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255)),
        sa.Column("full_name", sa.String(255)),
        sa.Column("birth_date", sa.Date()),
        sa.Column("gender", sa.String(16)),
        sa.Column("phone", sa.String(32)),
        sa.Column("address", sa.Text()),
        _created_at(),
        _updated_at(),
    )
    op.create_table(
        "reviews",
        _pk("review_id"),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.customer_id")),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.product_id"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text()),
        _created_at(),
    )
    op.create_table(
        "carts",
        _pk("cart_id"),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.customer_id"), nullable=False),
        _created_at(),
        _updated_at(),
    )
    op.create_table(
        "cart_items",
        _pk("cart_item_id"),
        sa.Column(
            "cart_id", sa.Integer(), sa.ForeignKey("carts.cart_id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.product_id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_table(
        "warehouses",
        _pk("warehouse_id"),
        sa.Column("warehouse_name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(1024)),
        _created_at(),
    )
    op.create_table(
        "inventory",
        _pk("inventory_id"),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.product_id"), nullable=False),
        sa.Column(
            "warehouse_id", sa.Integer(), sa.ForeignKey("warehouses.warehouse_id"), nullable=False
        ),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "last_updated", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_table(
        "suppliers",
        _pk("supplier_id"),
        sa.Column("supplier_name", sa.String(255), nullable=False),
        sa.Column("contact_name", sa.String(255)),
        sa.Column("phone", sa.String(32)),
        sa.Column("email", sa.String(255)),
        sa.Column("address", sa.Text()),
        _created_at(),
    )
    op.create_table(
        "import_invoices",
        _pk("invoice_id"),
        sa.Column("supplier_id", sa.Integer(), sa.ForeignKey("suppliers.supplier_id"), nullable=False),
        sa.Column("staff_id", sa.Integer(), sa.ForeignKey("users.account_id")),
        sa.Column("total_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column(
            "invoice_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("warehouse_id", sa.Integer(), sa.ForeignKey("warehouses.warehouse_id")),
        _created_at(),
    )
    op.create_table(
        "import_invoice_details",
        _pk("detail_id"),
        sa.Column(
            "invoice_id",
            sa.Integer(),
            sa.ForeignKey("import_invoices.invoice_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.product_id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
    )
    op.create_table(
        "payment_methods",
        _pk("method_id"),
        sa.Column("method_name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_table(
        "shipping_methods",
        _pk("shipping_method_id"),
        sa.Column("method_name", sa.String(255), nullable=False, unique=True),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("estimated_delivery_time", sa.String(255)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_table(
        "orders",
        _pk("order_id"),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.customer_id"), nullable=False),
        sa.Column("staff_id", sa.Integer(), sa.ForeignKey("users.account_id")),
        sa.Column("total_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("order_status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column(
            "shipping_method_id",
            sa.Integer(),
            sa.ForeignKey("shipping_methods.shipping_method_id"),
        ),
        sa.Column("shipping_address", sa.Text()),
        sa.Column("method_id", sa.Integer(), sa.ForeignKey("payment_methods.method_id")),
        sa.Column("payment_status", sa.String(32), nullable=False, server_default="unpaid"),
        _created_at(),
        _updated_at(),
    )
    op.create_table(
        "order_details",
        _pk("detail_id"),
        sa.Column(
            "order_id", sa.Integer(), sa.ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.product_id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("warehouse_id", sa.Integer(), sa.ForeignKey("warehouses.warehouse_id")),
    )
    op.create_table(
        "promotions",
        _pk("promotion_id"),
        sa.Column("promotion_code", sa.String(64), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        sa.Column("discount_type", sa.String(16), nullable=False),
        sa.Column("discount_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("min_order_value", sa.Numeric(12, 2)),
        sa.Column("start_date", sa.DateTime(timezone=True)),
        sa.Column("end_date", sa.DateTime(timezone=True)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        _updated_at(),
    )
    op.create_table(
        "order_promotions",
        _pk("order_promotion_id"),
        sa.Column(
            "order_id", sa.Integer(), sa.ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "promotion_id", sa.Integer(), sa.ForeignKey("promotions.promotion_id"), nullable=False
        ),
        sa.Column("applied_discount", sa.Numeric(12, 2), nullable=False, server_default="0"),
    )
    op.create_table(
        "transactions",
        _pk("transaction_id"),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.order_id"), nullable=False),
        sa.Column("method_id", sa.Integer(), sa.ForeignKey("payment_methods.method_id")),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("transaction_status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column(
            "transaction_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("transaction_code", sa.String(128), unique=True),
    )
    op.create_table(
        "audit_logs",
        _pk("log_id"),
        sa.Column("table_name", sa.String(64), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("record_id", sa.Integer()),
        sa.Column("staff_id", sa.Integer(), sa.ForeignKey("users.account_id")),
        sa.Column("details", sa.Text()),
        _created_at(),
    )


def downgrade() -> None:
    for name in reversed(TABLES):
        op.drop_table(name)
