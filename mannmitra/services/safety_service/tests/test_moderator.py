"""Tests for ModerationPolicy - safety-critical decision table.

Pipeline is redact -> score -> decide, and the decision depends only on
the two scores.
"""
import pytest

from mannmitra.shared.models import Action
from mannmitra.services.safety_service.config import ModerationThresholds
from mannmitra.services.safety_service.lexicon import DEFAULT_LEXICON, Lexicon
from mannmitra.services.safety_service.moderator import ModerationPolicy, moderate


@pytest.fixture
def policy():
    return ModerationPolicy()


class TestDecisionTable:
    """Tests for decide() at and around each threshold."""

    @pytest.mark.parametrize("toxicity,self_harm,expected", [
        (0.0, 0.0, Action.ALLOW),
        (0.5, 0.0, Action.ALLOW),     # strict comparison
        (0.51, 0.0, Action.HOLD),
        (0.0, 0.1, Action.ALLOW),
        (0.0, 0.11, Action.HOLD),
        (0.0, 0.3, Action.HOLD),
        (0.0, 0.31, Action.CRISIS),
        (1.0, 0.7, Action.CRISIS),    # crisis wins over toxicity
        (0.2, 0.7, Action.CRISIS),
    ])
    def test_decide(self, policy, toxicity, self_harm, expected):
        assert policy.decide(toxicity, self_harm) == expected

    def test_any_crisis_phrase_is_crisis(self, policy):
        """A single crisis entry (0.7) always crosses the crisis threshold."""
        verdict = policy.moderate("I think I might overdose")
        assert verdict.action == Action.CRISIS

    def test_thresholds_validated(self):
        with pytest.raises(ValueError):
            ModerationThresholds(CRISIS_SELF_HARM=0.1, HOLD_SELF_HARM=0.3)


class TestModerate:
    """End-to-end verdicts for community text."""

    def test_clean_text_allowed(self, policy):
        verdict = policy.moderate("I had a tough day but I'm managing")

        assert verdict.action == Action.ALLOW
        assert verdict.toxicity == 0.0
        assert verdict.self_harm == 0.0
        assert verdict.flagged_terms == []

    def test_insult_held(self, policy):
        verdict = policy.moderate("Everyone here is so stupid and pathetic")

        assert verdict.action == Action.HOLD
        assert verdict.toxicity == 1.0
        assert verdict.self_harm == 0.0
        assert verdict.flagged_terms == ["stupid", "pathetic"]

    def test_crisis_text(self, policy):
        verdict = policy.moderate("I want to die, there's no point living")

        assert verdict.action == Action.CRISIS
        assert verdict.self_harm == 1.0
        assert verdict.toxicity == pytest.approx(0.8)  # "die" is also severe

    def test_mild_profanity_allowed(self, policy):
        verdict = policy.moderate("damn, exams are close")
        assert verdict.action == Action.ALLOW
        assert verdict.toxicity == pytest.approx(0.2)

    def test_flagged_terms_across_categories(self, policy):
        verdict = policy.moderate("You are so stupid and I hate this")
        assert verdict.flagged_terms == ["stupid", "hate"]

    def test_flagged_terms_dedupe(self, policy):
        verdict = policy.moderate("stupid stupid STUPID")
        assert verdict.flagged_terms == ["stupid"]

    def test_scores_use_redacted_text(self, policy):
        """A term hidden inside an email address does not score."""
        verdict = policy.moderate("email me at killer@mail.com")

        assert verdict.toxicity == 0.0
        assert verdict.action == Action.ALLOW
        assert "kill" in verdict.flagged_terms

    def test_crisis_phrase_survives_redaction(self, policy):
        verdict = policy.moderate("Call 9876543210, I want to end my life")
        assert verdict.action == Action.CRISIS

    def test_empty_text(self, policy):
        verdict = policy.moderate("")
        assert verdict.action == Action.ALLOW
        assert verdict.toxicity == 0.0
        assert verdict.self_harm == 0.0

    def test_none_text(self, policy):
        assert policy.moderate(None).action == Action.ALLOW

    def test_non_string_raises(self, policy):
        with pytest.raises(TypeError):
            policy.moderate(["stupid"])

    def test_deterministic(self, policy):
        text = "You are so stupid and I hate this"
        assert policy.moderate(text) == policy.moderate(text)

    def test_module_level_moderate(self):
        assert moderate("Everyone here is so stupid and pathetic").action == Action.HOLD

    def test_edge_payload(self, policy):
        payload = policy.moderate("Everyone here is so stupid and pathetic").to_edge_payload()
        assert payload == {"toxicity": 1.0, "self_harm": 0.0, "action": "hold"}


class TestCrisisDominance:
    """Any crisis-lexicon phrase yields crisis, whatever the toxicity."""

    @pytest.mark.parametrize("phrase", DEFAULT_LEXICON.crisis)
    def test_phrase_with_insults(self, policy, phrase):
        verdict = policy.moderate(f"you are all stupid and pathetic, {phrase}")
        assert verdict.self_harm > 0.3
        assert verdict.action == Action.CRISIS

    @pytest.mark.parametrize("phrase", DEFAULT_LEXICON.crisis)
    def test_phrase_alone(self, policy, phrase):
        assert policy.moderate(phrase).action == Action.CRISIS


class TestInjectedLexicon:

    def test_empty_lexicon_allows_everything(self):
        empty = Lexicon(severe=(), moderate=(), crisis=(), profanity=())
        verdict = ModerationPolicy(lexicon=empty).moderate("I want to die")

        assert verdict.action == Action.ALLOW
        assert verdict.self_harm == 0.0
        assert verdict.flagged_terms == []
