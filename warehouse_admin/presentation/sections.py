"""
Dashboard sections
Each section is one screen under /dashboard: its title, the data API resource
it lists, and the table columns with the filter used to display each value.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    formatter: Optional[str] = None  # name of a registered template filter


@dataclass(frozen=True)
class Section:
    slug: str
    title: str
    resource: str
    columns: Tuple[Column, ...]

    @property
    def path(self) -> str:
        return f"/dashboard/{self.slug}"


_INVOICE_TOTALS = (
    Column("total_before_tax", "Tổng tiền trước thuế", "currency"),
    Column("total_tax", "Tiền thuế", "currency"),
    Column("total_after_tax", "Tổng tiền sau thuế", "currency"),
)

_PARTNER_COLUMNS = (
    Column("name", "Tên"),
    Column("tax_code", "Mã số thuế"),
    Column("address", "Địa chỉ"),
    Column("phone", "Số điện thoại"),
    Column("email", "Email"),
)

_DEBT_COLUMNS = (
    Column("invoice_number", "Số hóa đơn"),
    Column("partner_name", "Đối tác"),
    Column("supplier_name", "Công ty"),
    Column("due_date", "Hạn thanh toán"),
    Column("total_amount", "Tổng tiền", "currency"),
    Column("paid_amount", "Đã thanh toán", "currency"),
    Column("remaining_amount", "Còn lại", "currency"),
    Column("status", "Trạng thái"),
)

SECTIONS = (
    Section("imports", "Hóa đơn nhập kho", "imports", (
        Column("invoice_number", "Số hóa đơn"),
        Column("invoice_date", "Ngày lập"),
        Column("customer", "Người mua"),
    ) + _INVOICE_TOTALS + (Column("note", "Ghi chú"),)),
    Section("exports", "Hóa đơn xuất kho", "exports", (
        Column("invoice_number", "Số hóa đơn"),
        Column("invoice_date", "Ngày lập"),
    ) + _INVOICE_TOTALS + (Column("note", "Ghi chú"),)),
    Section("inventory", "Quản lý hàng hóa", "inventory", (
        Column("item_name", "Tên hàng hóa"),
        Column("unit", "Đơn vị tính"),
        Column("quantity", "Số lượng", "quantity"),
        Column("category", "Loại"),
        Column("price", "Đơn giá", "price"),
    )),
    Section("suppliers", "Quản lý người bán", "suppliers", _PARTNER_COLUMNS),
    Section("customers", "Quản lý người mua", "customers", _PARTNER_COLUMNS),
    Section("users", "Quản lý người dùng", "users", (
        Column("username", "Tên đăng nhập"),
        Column("fullname", "Họ và tên"),
        Column("email", "Email"),
        Column("role_name", "Vai trò"),
    )),
    Section("history", "Lịch sử", "logs", (
        Column("noi_dung", "Nội dung"),
        Column("user", "Người thực hiện"),
        Column("createdAt", "Thời gian"),
    )),
    Section("debts", "Công nợ", "debts", _DEBT_COLUMNS),
    Section("reports/expenses", "Báo cáo chi phí", "reports/expenses", (
        Column("invoice_date", "Ngày lập"),
        Column("invoice_number", "Số hóa đơn"),
        Column("item_name", "Tên hàng hóa"),
        Column("unit", "Đơn vị tính"),
        Column("quantity", "Số lượng", "quantity"),
        Column("price_before_tax", "Đơn giá", "price"),
        Column("total_before_tax", "Thành tiền", "currency"),
        Column("tax_rate", "Thuế suất"),
        Column("tax_amount", "Tiền thuế", "currency"),
        Column("total_after_tax", "Tổng tiền", "currency"),
        Column("seller_name", "Người bán"),
    )),
    Section("reports/statistics", "Thống kê", "reports/statistics", (
        Column("item_name", "Tên hàng hóa"),
        Column("unit", "Đơn vị tính"),
        Column("count", "Số hóa đơn", "quantity"),
        Column("total_quantity", "Tổng số lượng", "quantity"),
        Column("total_before_tax", "Tổng tiền trước thuế", "currency"),
        Column("total_tax", "Tổng thuế", "currency"),
        Column("total_after_tax", "Tổng tiền sau thuế", "currency"),
    )),
)

SECTIONS_BY_SLUG: Dict[str, Section] = {section.slug: section for section in SECTIONS}
