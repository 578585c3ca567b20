from pyroost.cli.rendering import TyperRenderer


def test_data_goes_to_stdout_and_status_to_stderr(capsys):
    renderer = TyperRenderer()

    renderer.data("people/ara")
    renderer.info("loading")
    renderer.error("failed")

    captured = capsys.readouterr()
    assert captured.out == "people/ara\n"
    assert "loading" in captured.err
    assert "failed" in captured.err


def test_quiet_suppresses_info_and_success_only(capsys):
    renderer = TyperRenderer(quiet=True)

    renderer.info("loading")
    renderer.success("done")
    renderer.warning("careful")
    renderer.error("failed")
    renderer.data("payload")

    captured = capsys.readouterr()
    assert "loading" not in captured.err
    assert "done" not in captured.err
    assert "careful" in captured.err
    assert "failed" in captured.err
    assert captured.out == "payload\n"
