import pytest

from thisaicodes.domain.models.generation import (
    FileDescriptor,
    GeneratedCode,
    GeneratedFile,
    Generation,
    GenerationContext,
    GenerationStatus,
    content_type_for,
)


def _generation() -> Generation:
    return Generation.start(
        GenerationContext(account_id=1),
        prompt="Build a pricing table",
        type="component",
        framework="",
    )


def test_start_assigns_id_and_defaults():
    generation = _generation()
    assert generation.status is GenerationStatus.PROCESSING
    assert generation.framework == "react"
    assert generation.project_id is None
    assert len(generation.id) == 36


def test_complete_records_result_and_files():
    generation = _generation()
    code = GeneratedCode(
        files=[GeneratedFile(name="a.tsx", content="X", type="text/tsx")],
        description="desc",
        instructions="run it",
    )
    descriptor = FileDescriptor(name="a.tsx", url="https://cdn/a.tsx", type="text/tsx")

    generation.complete(code, [descriptor])

    assert generation.status is GenerationStatus.COMPLETED
    assert generation.result["files"][0]["name"] == "a.tsx"
    assert generation.files == [descriptor]
    assert generation.completed_at is not None


def test_terminal_generation_cannot_transition_again():
    generation = _generation()
    generation.fail("boom")
    assert generation.error == "boom"
    with pytest.raises(ValueError):
        generation.complete(GeneratedCode(), [])
    with pytest.raises(ValueError):
        generation.fail("again")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("App.tsx", "text/tsx"),
        ("index.js", "text/javascript"),
        ("styles.css", "text/css"),
        ("package.json", "application/json"),
        ("README.md", "text/markdown"),
        ("Dockerfile", "text/plain"),
    ],
)
def test_content_type_for_extension(name, expected):
    assert content_type_for(name) == expected


def test_generated_code_from_dict_skips_unnamed_files():
    code = GeneratedCode.from_dict(
        {
            "files": [{"name": "a.tsx", "content": "X"}, {"content": "orphan"}, "junk"],
            "description": "d",
        }
    )
    assert [item.name for item in code.files] == ["a.tsx"]
    assert code.files[0].type == "text/tsx"
    assert code.instructions == ""


@pytest.mark.parametrize("files", [5, "a.tsx", {"name": "a.tsx"}, None])
def test_generated_code_from_dict_ignores_non_list_files(files):
    code = GeneratedCode.from_dict({"files": files, "description": "d"})
    assert code.files == []
    assert code.description == "d"
