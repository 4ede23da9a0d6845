import pytest

from minihttpd.cli import main
from minihttpd.sockets import passive_tcp


def test_unknown_port_fails(capsys):
    assert main(["--port", "no-such-service-xyz"]) == 1
    assert "Error starting server" in capsys.readouterr().err


def test_port_in_use_fails(capsys):
    occupant = passive_tcp("0", 5)
    try:
        port = occupant.getsockname()[1]
        assert main(["--port", str(port)]) == 1
    finally:
        occupant.close()
    assert "Error starting server" in capsys.readouterr().err


def test_help_lists_options(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "--port" in out
    assert "--root" in out