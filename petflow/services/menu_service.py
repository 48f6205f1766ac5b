from petflow.schemas.menu import MenuGroup, MenuItem, MenuResponse, MenuSection


def _group(title: str, items: list[tuple[str, bool]]) -> MenuGroup:
    return MenuGroup(title=title, items=[MenuItem(label=label, locked=locked) for label, locked in items])


def build_menu() -> MenuResponse:
    """Static navigation tree for the back office. Locked items need a higher plan."""
    registrations = MenuSection(
        key="registrations",
        label="Registrations",
        groups=[
            _group("Registrations", [
                ("Products", False),
                ("Clients and suppliers", False),
                ("Sellers", False),
                ("Employees", False),
                ("Financial accounts", False),
                ("Financial categories", False),
                ("Payment methods", False),
            ]),
            _group("Ads and advertising", [
                ("Ads", False),
            ]),
            _group("Tools", [
                ("Product categories", False),
                ("Price lists", False),
            ]),
        ],
        report_label="View registration reports",
    )

    sales = MenuSection(
        key="sales",
        label="Sales",
        groups=[
            _group("Management", [
                ("Listing management", False),
                ("Sales orders", False),
                ("Outgoing invoices", False),
                ("Consumer receipts", False),
                ("Point of sale", False),
                ("Import orders manually", False),
                ("Commercial proposals", False),
            ]),
            _group("Logistics", [
                ("Shipments", False),
                ("Reverse logistics", False),
                ("Order checkout", False),
                ("Automatic label printing", True),
                ("Carrier shipping", False),
            ]),
            _group("Services", [
                ("Contracts", False),
                ("Service orders", False),
                ("Freight documents", False),
                ("Service invoices", False),
                ("Billing", False),
                ("Service reports", False),
            ]),
        ],
        report_label="View sales reports",
    )

    inventory = MenuSection(
        key="inventory",
        label="Inventory",
        groups=[
            _group("Purchasing", [
                ("Purchase orders", False),
                ("Incoming invoices", False),
                ("Suppliers", False),
                ("Purchase suggestions", True),
            ]),
            _group("Inventory", [
                ("Stock entries", False),
                ("Stock count", False),
                ("Production orders", True),
                ("Warehouses", False),
            ]),
        ],
        report_label="View purchasing and inventory reports",
    )

    finance = MenuSection(
        key="finance",
        label="Finance",
        groups=[
            _group("Financial management", [
                ("Cash and banks", False),
                ("Accounts payable", False),
                ("Accounts receivable", False),
                ("Bank remittances", True),
                ("Financial statement", False),
                ("Commissions", False),
                ("Cash control", False),
                ("Grouped billing", True),
            ]),
            _group("Taxes and accounting", [
                ("Small business tax", False),
                ("State tax forms", False),
                ("Accountant workspace", False),
            ]),
        ],
        report_label="View financial reports",
    )

    return MenuResponse(sections=[registrations, sales, inventory, finance])
