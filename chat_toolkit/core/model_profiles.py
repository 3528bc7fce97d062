"""Model identifier to dispatch profile resolution"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from ..models.conversation import ModelProfile


@dataclass(frozen=True)
class ProfileRule:
    """A named predicate over model identifiers"""
    name: str
    predicate: Callable[[str], bool]

    def matches(self, model: str) -> bool:
        return self.predicate(model)


# Each flag is decided by its own rule, independently of the others
USES_RESPONSES_ENDPOINT = ProfileRule(
    "responses_endpoint",
    lambda model: model.startswith("o3") or model == "o4-mini",
)
USES_COMPLETION_TOKEN_LIMIT = ProfileRule(
    "max_completion_tokens",
    lambda model: "gpt-5" in model or "gpt-4.1" in model or model.startswith("o"),
)
USES_REASONING_PARAMS = ProfileRule(
    "reasoning_params",
    lambda model: "gpt-5" in model or model.startswith("o"),
)


class ModelProfileResolver:
    """Derive a ModelProfile from a free-form model identifier

    Unknown identifiers fall through to the chat / messages / max_tokens
    defaults; rejecting a model is left to the upstream service.
    """

    def __init__(
        self,
        responses_rule: ProfileRule = USES_RESPONSES_ENDPOINT,
        completion_tokens_rule: ProfileRule = USES_COMPLETION_TOKEN_LIMIT,
        reasoning_rule: ProfileRule = USES_REASONING_PARAMS,
    ):
        self.responses_rule = responses_rule
        self.completion_tokens_rule = completion_tokens_rule
        self.reasoning_rule = reasoning_rule

    def resolve(self, model: str) -> ModelProfile:
        """
        Resolve a model identifier

        Args:
            model: Model identifier, e.g. "gpt-4.1" or "o3-mini"

        Returns:
            ModelProfile
        """
        model = model or ""
        uses_responses = self.responses_rule.matches(model)

        return ModelProfile(
            endpoint_kind="responses" if uses_responses else "chat",
            payload_field="input" if uses_responses else "messages",
            token_limit_field=(
                "max_completion_tokens"
                if self.completion_tokens_rule.matches(model)
                else "max_tokens"
            ),
            uses_reasoning_params=self.reasoning_rule.matches(model),
        )

    def explain(self, model: str) -> Dict[str, bool]:
        """Report which rules match a model identifier"""
        model = model or ""
        rules: List[ProfileRule] = [
            self.responses_rule,
            self.completion_tokens_rule,
            self.reasoning_rule,
        ]
        return {rule.name: rule.matches(model) for rule in rules}


def resolve_profile(model: str) -> ModelProfile:
    """Convenience function for ModelProfileResolver().resolve"""
    return ModelProfileResolver().resolve(model)
