"""
Sidebar navigation entries, in display order
"""

from warehouse_admin.data.navigation_entry import NavigationEntry

SIDEBAR_ENTRIES = (
    NavigationEntry("Hóa đơn nhập kho", "/dashboard/imports", "file-invoice"),
    NavigationEntry("Hóa đơn xuất kho", "/dashboard/exports", "file-export"),
    NavigationEntry("Quản lý hàng hóa", "/dashboard/inventory", "box-open"),
    NavigationEntry("Quản lý người bán", "/dashboard/suppliers", "user-tie"),
    NavigationEntry("Quản lý người mua", "/dashboard/customers", "users"),
    NavigationEntry("Quản lý người dùng", "/dashboard/users", "user-cog"),
    NavigationEntry("Lịch sử", "/dashboard/history", "history"),
)
