"""Tests for the custom-prompt store and the translation prompt file."""

import json

from english_optimizer.prompts.custom import EXAMPLE_PROMPTS, CustomPrompt, CustomPromptStore
from english_optimizer.prompts.translation import (
    DEFAULT_TRANSLATION_PROMPT,
    TranslationPromptLoader,
    fill_template,
)


def test_store_seeds_examples(tmp_path):
    path = tmp_path / "prompts" / "custom-prompts.json"
    store = CustomPromptStore(path)

    assert path.exists()
    assert [p.name for p in store.get_prompts()] == [p.name for p in EXAMPLE_PROMPTS]
    assert store.get_by_hotkey("a").name == "Academic"
    assert store.get_by_hotkey("f").name == "Friendly"
    assert store.get_by_hotkey("z") is None


def test_store_does_not_overwrite_existing_file(tmp_path):
    path = tmp_path / "custom-prompts.json"
    path.write_text(json.dumps([{"name": "Terse", "description": "d", "prompt": "p"}]))

    store = CustomPromptStore(path)

    assert [p.name for p in store.get_prompts()] == ["Terse"]
    assert store.get_prompts()[0].hotkey is None


def test_add_lookup_and_remove(tmp_path):
    store = CustomPromptStore(tmp_path / "custom-prompts.json")
    store.add(CustomPrompt(name="Pirate", description="Arr", prompt="Talk like a pirate.", hotkey="x"))

    assert store.get_by_name("pirate").prompt == "Talk like a pirate."
    assert store.get_by_hotkey("x").name == "Pirate"
    assert store.remove("PIRATE") is True
    assert store.remove("Pirate") is False
    assert store.get_by_name("Pirate") is None


def test_invalid_file_reads_as_empty(tmp_path):
    path = tmp_path / "custom-prompts.json"
    path.write_text('[{"name": "no prompt field"}]')
    assert CustomPromptStore(path).get_prompts() == []


def test_translation_prompt_seeded_on_first_use(tmp_path):
    path = tmp_path / "translation-prompt.txt"
    loader = TranslationPromptLoader(path)

    assert loader.get_prompt() == DEFAULT_TRANSLATION_PROMPT
    assert path.read_text(encoding="utf-8") == DEFAULT_TRANSLATION_PROMPT


def test_translation_prompt_reads_user_edits(tmp_path):
    path = tmp_path / "translation-prompt.txt"
    path.write_text("Make it shine: {text}", encoding="utf-8")
    assert TranslationPromptLoader(path).get_prompt() == "Make it shine: {text}"


def test_translation_prompt_default_location(tmp_path):
    loader = TranslationPromptLoader()
    assert loader.path == tmp_path / "home" / ".english-optimizer" / "translation-prompt.txt"


def test_fill_template():
    assert fill_template(DEFAULT_TRANSLATION_PROMPT, "你好").count('"你好"') == 1
    assert fill_template("no placeholder", "x") == "no placeholder"
