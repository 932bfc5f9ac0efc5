from dataclasses import dataclass, field

from autodevterm.wizard.results import error_results_view, results_view, wrap_text


@dataclass
class _Result:
    success: bool
    module: str
    version: str = ""
    error: str = ""


@dataclass
class _Model:
    install_results: list = field(default_factory=list)

    def success_count(self):
        return sum(1 for r in self.install_results if r.success)


def test_all_successful_title_and_summary():
    model = _Model([_Result(True, "gitconfig", "1.0.0"), _Result(True, "ohmyzsh")])
    view = results_view(model)
    assert "✓ Installation Complete!" in view
    assert "All 2 module(s) installed successfully!" in view
    assert "Version: 1.0.0" in view


def test_partial_success():
    model = _Model([_Result(True, "gitconfig"), _Result(False, "ohmyzsh", error="boom")])
    view = results_view(model)
    assert "⚠ Partial Success" in view
    assert "1 of 2 modules installed successfully" in view
    assert "Failed" in view
    assert "boom" in view


def test_no_results_is_failure():
    view = results_view(_Model())
    assert "✗ Installation Failed" in view
    assert "No modules were installed successfully" in view


def test_next_steps_only_for_starship():
    with_starship = results_view(_Model([_Result(True, "starship")]))
    without = results_view(_Model([_Result(True, "gitconfig")]))
    assert "Next Steps:" in with_starship
    assert "starship init <shell_name>" in with_starship
    assert "Next Steps:" not in without


def test_failed_starship_gives_no_next_steps():
    view = results_view(_Model([_Result(False, "starship", error="nope")]))
    assert "Next Steps:" not in view


def test_long_error_is_wrapped():
    error = " ".join(["segment"] * 20)
    view = results_view(_Model([_Result(False, "fonts", error=error)]))
    for line in wrap_text(error, 60):
        assert line in view


def test_wrap_text_empty():
    assert wrap_text("", 10) == []


def test_wrap_text_simple():
    assert wrap_text("a b c", 3) == ["a b", "c"]


def test_wrap_text_long_word_kept_whole():
    assert wrap_text("supercalifragilistic word", 5) == ["supercalifragilistic", "word"]


def test_wrap_text_invariants():
    text = "the quick  brown fox jumps over the lazy dog again and again"
    lines = wrap_text(text, 12)
    assert " ".join(lines) == " ".join(text.split())
    for line in lines:
        assert len(line) <= 12 or " " not in line


def test_error_results_view():
    view = error_results_view(ValueError("disk full"))
    assert "Installation Error" in view
    assert "disk full" in view
    assert "Press Esc to return to the main menu" in view