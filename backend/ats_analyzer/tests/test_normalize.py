import re

import pytest

from ats_analyzer.services.normalize import normalize, remove_accents

ALLOWED = re.compile(r"^[a-z0-9 @.\-+#()]*$")

SAMPLES = [
    "",
    "   \n\t  ",
    "João Conceição — Desenvolvedor Sênior",
    "C#, .NET Core & ASP.NET (MVC) | SQL-Server",
    "E-mail: Maria.Santos@Example.COM  Tel: +55 (11) 98765-4321",
    "ÀÉÎÕÜ çñ ß ø ł",
    "╔═══╗ ▓▓▓ █ résumé ■ □",
    "tabs\tand\nnew\r\nlines nbsp",
]


def test_empty_and_whitespace_become_empty():
    assert normalize("") == ""
    assert normalize("  \n\t ") == ""
    assert normalize(None) == ""


def test_lowercases_and_folds_accents():
    assert normalize("Desenvolvedor SÊNIOR em São Paulo") == "desenvolvedor senior em sao paulo"
    assert remove_accents("estagiário intermediário") == "estagiario intermediario"


def test_keeps_technical_punctuation():
    assert normalize("C#, .NET & Node.js (TypeScript) c++") == "c# .net node.js (typescript) c++"


def test_replaces_noise_and_collapses_spaces():
    assert normalize("  python / django ;;  flask!! ") == "python django flask"


@pytest.mark.parametrize("text", SAMPLES)
def test_output_alphabet_and_spacing(text):
    out = normalize(text)
    assert ALLOWED.match(out)
    assert "  " not in out
    assert out == out.strip()


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once
