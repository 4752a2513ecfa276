from boutique.starter_catalog import STARTER_CATEGORIES, STARTER_PRODUCTS


def test_seed_sell_and_dashboard(app, db_session, monkeypatch):
    monkeypatch.setitem(app.config, "SEED_CATALOG_ON_EMPTY", True)
    runner = app.test_cli_runner()

    seeded = runner.invoke(args=["boutique", "seed"])
    assert seeded.exit_code == 0, seeded.output
    assert f"Seeded {len(STARTER_CATEGORIES)} categories and {len(STARTER_PRODUCTS)} products" in seeded.output

    again = runner.invoke(args=["boutique", "seed"])
    assert "SKIP" in again.output

    sold = runner.invoke(args=["boutique", "sell", "prod-rice", "2"])
    assert sold.exit_code == 0, sold.output
    assert "total=2500" in sold.output

    board = runner.invoke(args=["boutique", "dashboard"])
    assert "Revenue: 2500" in board.output
    assert "Low stock: 2" in board.output


def test_sell_rejection_exits_nonzero(app, db_session):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["boutique", "sell", "missing", "1"])
    assert result.exit_code != 0
    assert "not_found" in result.output
