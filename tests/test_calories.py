import pytest

from nutrition_planner.models import Profile
from nutrition_planner.rules import CalorieModel
from nutrition_planner.rules.calories import approximate_age, basal_metabolic_rate


@pytest.fixture
def model() -> CalorieModel:
    return CalorieModel(rules={})


@pytest.mark.parametrize(
    "bucket, expected",
    [
        ("18-24", 21),
        ("25-34", 30),
        ("35-44", 40),
        ("65+", 70),
        ("65-+", 70),
        (None, 30),
        ("", 30),
        ("unknown", 30),
        ("a-b", 30),
    ],
)
def test_approximate_age(bucket, expected):
    assert approximate_age(bucket) == expected


def test_male_and_female_differ_by_166():
    male = basal_metabolic_rate("Male", 80, 180, 30)
    female = basal_metabolic_rate("Female", 80, 180, 30)
    assert male - female == 166


def test_other_gender_is_mean():
    male = basal_metabolic_rate("Male", 65, 165, 40)
    female = basal_metabolic_rate("Female", 65, 165, 40)
    assert basal_metabolic_rate("Other", 65, 165, 40) == (male + female) / 2
    assert basal_metabolic_rate(None, 65, 165, 40) == (male + female) / 2


def test_scenario_lose_weight_male(model, profile):
    # (10*80 + 6.25*180 - 5*30 + 5) * 1.55 * 0.8
    assert model.daily_calories(profile) == 2270


def test_gain_weight_and_unknown_activity(model):
    profile = Profile(goal="Gain weight", age_range="25-34", gender="Female",
                      height_cm=165, weight_kg=60, activity_level="Couch")
    bmr = 10 * 60 + 6.25 * 165 - 5 * 30 - 161
    assert model.daily_calories(profile) == round(bmr * 1.4 * 1.15)


def test_defaults_for_missing_inputs(model):
    profile = Profile()
    bmr = 10 * 70 + 6.25 * 170 - 5 * 30 - 78
    assert model.daily_calories(profile) == round(bmr * 1.4)


def test_non_numeric_measurements_use_defaults(model):
    profile = Profile.model_validate({"heightCm": "tall", "weightKg": "-3", "gender": "Female"})
    assert profile.height_cm is None
    assert profile.weight_kg is None
    assert model.daily_calories(profile) == round((10 * 70 + 6.25 * 170 - 150 - 161) * 1.4)


def test_always_positive_integer(model):
    profile = Profile(age_range="95-99", gender="Female", height_cm=1, weight_kg=1,
                      activity_level="Sedentary - 0 hours/week", goal="Lose weight")
    result = model.daily_calories(profile)
    assert isinstance(result, int)
    assert result >= 1


def test_rules_file_overrides_factor():
    model = CalorieModel(rules={"activity_factors": {"Moderate - 1-2 hours/week": 1.5}})
    assert model.activity_factor("Moderate - 1-2 hours/week") == 1.5
    assert model.activity_factor("Active - 2-4 hours/week") == 1.725
    assert model.goal_factor("Maintain weight") == 1.0


def test_bundled_rules_match_builtins(profile):
    assert CalorieModel().daily_calories(profile) == 2270


@pytest.mark.parametrize("bucket", ["nan-1", "inf+", "1-inf", "1e308-1e308", "200-220", "1e999+"])
def test_non_finite_or_implausible_age_buckets_use_default(bucket):
    assert approximate_age(bucket) == 30


@pytest.mark.parametrize(
    "data",
    [
        {"ageRange": "nan-1"},
        {"ageRange": "inf+"},
        {"weightKg": 1e308},
        {"heightCm": "1e999"},
        {"heightCm": float("inf"), "weightKg": float("nan")},
        {"weightKg": 10**400},
    ],
)
def test_extreme_inputs_still_give_positive_integer(model, data):
    result = model.daily_calories(Profile.model_validate(data))
    assert isinstance(result, int)
    assert result >= 1


def test_overflowing_measurements_fall_back_to_defaults(model):
    huge = Profile.model_validate({"weightKg": 1e308, "heightCm": 1e308, "gender": "Female"})
    assert model.daily_calories(huge) == model.daily_calories(Profile(gender="Female"))


def test_infinite_measurements_are_treated_as_missing():
    profile = Profile.model_validate({"heightCm": "1e999", "weightKg": 10**400})
    assert profile.height_cm is None
    assert profile.weight_kg is None
