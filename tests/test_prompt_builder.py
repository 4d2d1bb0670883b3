from nutrition_planner.models import Profile
from nutrition_planner.services.prompt_builder import build_menu_prompt, new_entropy_token


def test_prompt_embeds_profile_target_version_and_token(profile):
    prompt = build_menu_prompt(profile, 2270, 4, "abc123")
    assert "- Goal: Lose weight" in prompt
    assert "- Age range: 25-34" in prompt
    assert "- Height: 180 cm" in prompt
    assert "- Weight: 80 kg" in prompt
    assert "- Activity level: Moderate - 1-2 hours/week" in prompt
    assert "Target daily calories: 2270 kcal" in prompt
    assert "MENU VERSION 4" in prompt
    assert '"abc123"' in prompt
    assert '"version": 4' in prompt
    assert "EXACTLY 7 days" in prompt
    assert "Do not wrap JSON in markdown fences" in prompt


def test_prompt_is_deterministic(profile):
    assert build_menu_prompt(profile, 2000, 1, "t") == build_menu_prompt(profile, 2000, 1, "t")


def test_prompt_with_sparse_profile():
    prompt = build_menu_prompt(Profile(height_cm=172.5), 2000, 1, "t")
    assert "- Height: 172.5 cm" in prompt
    assert "- Weight: not provided" in prompt


def test_entropy_tokens_are_fresh():
    tokens = {new_entropy_token() for _ in range(50)}
    assert len(tokens) == 50
