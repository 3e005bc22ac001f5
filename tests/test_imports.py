def test_import_shardfall_package() -> None:
    import importlib

    module = importlib.import_module("shardfall")
    assert module is not None
    assert module.__version__


def test_import_services_no_side_effects() -> None:
    from shardfall.services import BattleStore

    store = BattleStore()
    assert len(store) == 0


def test_import_main_entry_point() -> None:
    from shardfall.main import main

    assert callable(main)
