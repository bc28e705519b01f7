"""Unit tests for BallotFactory and counting rule coercion."""

from uuid import uuid4

import pytest

from tests.helpers.fake_time_authority import FakeTimeAuthority
from votecast.application.services.ballot_factory import (
    BallotFactory,
    coerce_counting_rule,
)
from votecast.domain.errors import InvalidBallotShapeError, UnknownCountingRuleError
from votecast.domain.models.election import CountingRule


@pytest.fixture
def factory(fake_time_authority: FakeTimeAuthority) -> BallotFactory:
    return BallotFactory(fake_time_authority)


class TestCoerceCountingRule:
    """Stored codes resolve to rules; anything else fails closed."""

    @pytest.mark.parametrize(
        ("code", "rule"),
        [
            ("FPTP", CountingRule.PLURALITY),
            ("AV", CountingRule.INSTANT_RUNOFF),
            ("STV", CountingRule.STV),
            ("PREFERENTIAL", CountingRule.PREFERENTIAL),
        ],
    )
    def test_known_codes(self, code: str, rule: CountingRule) -> None:
        assert coerce_counting_rule(code) is rule

    def test_enum_passes_through(self) -> None:
        assert coerce_counting_rule(CountingRule.STV) is CountingRule.STV

    @pytest.mark.parametrize("code", ["BORDA", "fptp", ""])
    def test_unknown_codes(self, code: str) -> None:
        with pytest.raises(UnknownCountingRuleError) as exc_info:
            coerce_counting_rule(code)
        assert exc_info.value.counting_rule == code


class TestCreateBallot:
    """Ballot shape follows the counting rule."""

    def test_plurality_wraps_single_choice(
        self, factory: BallotFactory, fake_time_authority: FakeTimeAuthority
    ) -> None:
        election_id = uuid4()
        choice = uuid4()

        ballot = factory.create_ballot(
            CountingRule.PLURALITY, election_id, single_choice=choice
        )

        assert ballot.preferences == (choice,)
        assert ballot.election_id == election_id
        assert ballot.cast_at == fake_time_authority.utcnow()

    def test_plurality_ignores_ranking(self, factory: BallotFactory) -> None:
        choice = uuid4()
        ballot = factory.create_ballot(
            "FPTP", uuid4(), single_choice=choice, ranked_choices=[uuid4(), uuid4()]
        )
        assert ballot.preferences == (choice,)

    def test_plurality_requires_choice(self, factory: BallotFactory) -> None:
        with pytest.raises(InvalidBallotShapeError) as exc_info:
            factory.create_ballot(CountingRule.PLURALITY, uuid4())
        assert exc_info.value.counting_rule == "FPTP"

    @pytest.mark.parametrize(
        "rule",
        [CountingRule.INSTANT_RUNOFF, CountingRule.STV, CountingRule.PREFERENTIAL],
    )
    def test_ranked_keeps_order(
        self, factory: BallotFactory, rule: CountingRule
    ) -> None:
        ranking = [uuid4(), uuid4(), uuid4()]
        ballot = factory.create_ballot(rule, uuid4(), ranked_choices=ranking)
        assert ballot.preferences == tuple(ranking)

    def test_ranked_does_not_validate_duplicates(self, factory: BallotFactory) -> None:
        repeated = uuid4()
        ballot = factory.create_ballot(
            CountingRule.INSTANT_RUNOFF, uuid4(), ranked_choices=[repeated, repeated]
        )
        assert ballot.preferences == (repeated, repeated)

    @pytest.mark.parametrize("ranking", [None, []])
    def test_ranked_requires_preferences(
        self, factory: BallotFactory, ranking: list | None
    ) -> None:
        with pytest.raises(InvalidBallotShapeError):
            factory.create_ballot(
                CountingRule.STV, uuid4(), single_choice=uuid4(), ranked_choices=ranking
            )

    def test_unknown_rule(self, factory: BallotFactory) -> None:
        with pytest.raises(UnknownCountingRuleError):
            factory.create_ballot("BORDA", uuid4(), single_choice=uuid4())

    def test_each_ballot_gets_fresh_id(self, factory: BallotFactory) -> None:
        election_id = uuid4()
        choice = uuid4()
        first = factory.create_ballot("FPTP", election_id, single_choice=choice)
        second = factory.create_ballot("FPTP", election_id, single_choice=choice)
        assert first.ballot_id != second.ballot_id
