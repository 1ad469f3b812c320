from cinescape.prompting.prompt_builder import (
    STYLE_SUFFIX,
    build_create_prompt,
    build_expansion_prompt,
)


def test_create_prompt_appends_style_suffix():
    prompt = build_create_prompt("A magical forest clearing at sunset")
    assert prompt == (
        "A magical forest clearing at sunset -- cinematic lighting, high resolution,"
        " animation style background art, detailed environment"
    )
    assert prompt.endswith(STYLE_SUFFIX)


def test_expansion_prompt_embeds_context():
    prompt = build_expansion_prompt("add pine trees")
    assert "Context: add pine trees." in prompt
    assert "Create a new, wider version of this scene extending to the sides" in prompt
    assert "Target style: identical to reference." in prompt
    assert "Maintain the same lighting, color palette, and art style." in prompt
    assert prompt.startswith("Input is a reference animation background.")
