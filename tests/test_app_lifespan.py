"""Application startup/shutdown and the command-line entry point."""
from unittest.mock import MagicMock, patch

import pytest

from pushgate import __main__ as cli
from pushgate.domain.common.errors import CredentialsError
from pushgate.settings import get_config_store


@pytest.fixture
def no_grpc():
    store = get_config_store()
    store.update({"grpc_enabled": False})
    yield
    store.clear_overrides()


async def test_lifespan_initialises_and_closes_firebase(no_grpc):
    from pushgate import main

    main.app.state.push_service = None
    fake_app = MagicMock()
    with patch.object(main, "init_firebase", return_value=fake_app) as init, \
            patch.object(main, "close_firebase") as close:
        async with main.lifespan(main.app):
            assert main.app.state.push_service is not None
        init.assert_called_once()
        close.assert_called_once_with(fake_app)
    assert main.app.state.push_service is None


async def test_lifespan_keeps_injected_service(no_grpc, push_service):
    from pushgate import main

    main.app.state.push_service = push_service
    with patch.object(main, "init_firebase") as init:
        async with main.lifespan(main.app):
            assert main.app.state.push_service is push_service
    init.assert_not_called()
    main.app.state.push_service = None


async def test_lifespan_fails_without_credentials(no_grpc):
    from pushgate import main

    main.app.state.push_service = None
    with patch.object(main, "init_firebase", side_effect=CredentialsError("sa.json", "missing")):
        with pytest.raises(CredentialsError):
            async with main.lifespan(main.app):
                pass


async def test_lifespan_closes_firebase_when_grpc_fails_to_start():
    from pushgate import main
    from pushgate.api.rpc import servicer

    store = get_config_store()
    store.update({"grpc_enabled": True})
    main.app.state.push_service = None
    fake_app = MagicMock()
    try:
        with patch.object(main, "init_firebase", return_value=fake_app), \
                patch.object(main, "close_firebase") as close, \
                patch.object(servicer, "create_server", side_effect=RuntimeError("port in use")):
            with pytest.raises(RuntimeError):
                async with main.lifespan(main.app):
                    pass
        close.assert_called_once_with(fake_app)
        assert main.app.state.push_service is None
    finally:
        store.clear_overrides()


async def test_lifespan_closes_firebase_on_error(no_grpc):
    from pushgate import main

    main.app.state.push_service = None
    fake_app = MagicMock()
    with patch.object(main, "init_firebase", return_value=fake_app), \
            patch.object(main, "close_firebase") as close:
        with pytest.raises(RuntimeError):
            async with main.lifespan(main.app):
                raise RuntimeError("boom")
    close.assert_called_once_with(fake_app)
    assert main.app.state.push_service is None


async def test_lifespan_starts_and_stops_grpc(push_service):
    from pushgate import main

    store = get_config_store()
    store.update({"grpc_enabled": True, "grpc_host": "127.0.0.1", "grpc_port": 0})
    main.app.state.push_service = push_service
    try:
        async with main.lifespan(main.app):
            pass
    finally:
        store.clear_overrides()
        main.app.state.push_service = None


def test_cli_arguments():
    args = cli.parse_arguments(["-p", "/secrets/sa.json", "--port", "9000", "--no-grpc"])
    assert cli.overrides_from_args(args) == {
        "service_account_path": "/secrets/sa.json",
        "http_port": 9000,
        "grpc_enabled": False,
    }


def test_cli_defaults_leave_config_alone():
    assert cli.overrides_from_args(cli.parse_arguments([])) == {}


def test_cli_main_runs_uvicorn(capsys):
    with patch.object(cli.uvicorn, "run") as run:
        try:
            assert cli.main(["--port", "9100", "--grpc-port", "6100"]) == 0
        finally:
            get_config_store().clear_overrides()
    kwargs = run.call_args.kwargs
    assert run.call_args.args == ("pushgate.main:app",)
    assert kwargs["port"] == 9100
    assert "FCM send message service" in capsys.readouterr().out
