"""Consensus resolution between a primary and an optional secondary verdict.

The rule compares the mean of both confidences against the primary's own
confidence.  Since ``(p + s) / 2 > p`` holds exactly when ``s > p``, this is a
plain "strictly more confident secondary wins" comparison: ties keep the
primary, and fields from the two verdicts are never merged.  Whether a merged
verdict (union of actions, widened cost envelope) was intended is an open
question; the literal rule is what ships.
"""

from datetime import UTC, datetime

from loguru import logger

from ridewire.models.verdict import ConsensusResult, Verdict


class ConsensusResolver:
    """Deterministic picker between two provider verdicts.  Pure Python, no LLM."""

    @staticmethod
    def select(primary: Verdict, secondary: Verdict | None = None) -> Verdict:
        """Return the verdict that wins consensus.

        Args:
            primary: Verdict from the primary provider.
            secondary: Verdict from the secondary provider, or ``None`` when
                no second opinion was taken.

        Returns:
            ``primary`` itself when ``secondary`` is ``None`` or not strictly
            more confident; otherwise ``secondary`` itself.
        """
        if secondary is None:
            return primary
        avg = (primary.confidence + secondary.confidence) / 2
        return secondary if avg > primary.confidence else primary

    @classmethod
    def resolve(
        cls,
        primary: Verdict,
        secondary: Verdict | None = None,
        *,
        primary_name: str = "primary",
        secondary_name: str = "secondary",
    ) -> ConsensusResult:
        """Select the winning verdict and stamp it as a :class:`ConsensusResult`.

        Args:
            primary: Verdict from the primary provider.
            secondary: Verdict from the secondary provider, if any.
            primary_name: Provider label recorded when the primary wins.
            secondary_name: Provider label recorded when the secondary wins.

        Returns:
            A result carrying the selected verdict unchanged.
        """
        chosen = cls.select(primary, secondary)
        provider = secondary_name if chosen is secondary else primary_name
        if secondary is not None:
            logger.info(
                "Consensus: {primary}={p:.2f} vs {secondary}={s:.2f} -> {winner}",
                primary=primary_name,
                p=primary.confidence,
                secondary=secondary_name,
                s=secondary.confidence,
                winner=provider,
            )
        return ConsensusResult(
            verdict=chosen,
            timestamp=datetime.now(tz=UTC),
            provider=provider,
            second_opinion=secondary is not None,
        )
