from firebird_hosting.selftest import run_selftest


def test_selftest_passes(capsys):
    assert run_selftest() is True

    out = capsys.readouterr().out
    assert "core imports ok" in out
    assert "firebird_hosting selftest: ok" in out
