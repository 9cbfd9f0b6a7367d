from decimal import Decimal

from budget_manager.main import build_services, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.db is None
    assert not args.serve
    assert (args.host, args.port) == ("127.0.0.1", 5000)


def test_parse_args_server_mode():
    args = parse_args(["--serve", "--port", "8080", "--db", "x.db", "--debug"])
    assert args.serve and args.debug
    assert args.port == 8080
    assert args.db == "x.db"


def test_build_services_shares_one_database(db):
    services = build_services(db)
    assert set(services) == {"category_service", "tx_service", "budget_service", "report_service"}
    food = services["category_service"].get_by_kind("expense")[0]
    services["tx_service"].create("expense", food.id, "9.99", "2024-05-01", "Book")
    assert services["report_service"].get_summary().total_expenses == Decimal("9.99")
