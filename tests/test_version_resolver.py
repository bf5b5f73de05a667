"""Tests for version page resolution."""

import asyncio

import pytest

from cratesite.errors import NoVersionsError
from cratesite.notify import FlashQueue
from cratesite.versioning.models import LiteralToken, PackageSummary, RecordToken
from cratesite.versioning.resolver import VersionResolver, fallback_token, normalize_request

from helpers import FakeProbe, make_package


def resolve(package, token=None, resolver=None):
    resolver = resolver or VersionResolver(notifier=FlashQueue())
    return asyncio.run(resolver.resolve(package, token))


@pytest.fixture
def flashes():
    return FlashQueue()


@pytest.fixture
def foo():
    return make_package("foo", "2.0.0-beta.1", [("2.0.0-beta.1", False), ("1.0.0", False)])


class TestNormalizeRequest:
    @pytest.mark.parametrize("token", [None, "", "all"])
    def test_no_version_tokens(self, token):
        assert normalize_request(token) == ""

    def test_literal_token_kept(self):
        assert normalize_request("1.2.3") == "1.2.3"


class TestDefaultVersion:
    """Resolution when no version was requested."""

    def test_prerelease_max_prefers_latest_stable(self, foo, flashes):
        outcome = resolve(foo, resolver=VersionResolver(notifier=flashes))
        assert outcome.version.num == "1.0.0"
        assert outcome.effective == "1.0.0"
        assert outcome.not_found is None
        assert flashes.messages == []

    def test_all_token_behaves_like_no_token(self, foo):
        assert resolve(foo, "all").version.num == "1.0.0"

    def test_stable_max_is_used_directly(self):
        package = make_package("baz", "1.2.0", [("1.3.0-rc.1", False), ("1.2.0", False), ("1.1.0", False)])
        assert resolve(package).version.num == "1.2.0"

    def test_stable_max_used_even_if_yanked(self):
        package = make_package("baz", "1.2.0", [("1.2.0", True), ("1.1.0", False)])
        assert resolve(package).version.num == "1.2.0"

    def test_first_stable_unyanked_in_collection_order(self):
        package = make_package(
            "qux",
            "3.0.0-alpha",
            [("3.0.0-alpha", False), ("2.1.0", True), ("2.0.0", False), ("1.0.0", False)],
        )
        assert resolve(package).version.num == "2.0.0"

    def test_falls_back_to_unyanked_prerelease(self):
        package = make_package(
            "qux",
            "3.0.0-beta.2",
            [("3.0.0-beta.2", True), ("3.0.0-beta.1", False), ("2.0.0", True)],
        )
        outcome = resolve(package)
        assert outcome.version.num == "3.0.0-beta.1"
        assert outcome.degraded is False

    def test_everything_yanked_returns_max_version(self):
        package = make_package("qux", "2.0.0-rc.1", [("2.0.0-rc.1", True), ("1.0.0", True)])
        outcome = resolve(package)
        assert outcome.version.num == "2.0.0-rc.1"
        assert outcome.version.yanked is True
        assert outcome.degraded is True

    def test_single_yanked_stable_version(self, flashes):
        package = make_package("bar", "1.0.0", [("1.0.0", True)])
        outcome = resolve(package, resolver=VersionResolver(notifier=flashes))
        assert outcome.version.num == "1.0.0"
        assert flashes.messages == []

    def test_all_yanked_sentinel_matches_record(self):
        package = make_package("old", "0.0.0", [("0.1.0", True), ("0.0.0", True)])
        assert resolve(package).version.num == "0.0.0"

    def test_all_yanked_sentinel_falls_back_to_first_record(self, flashes):
        package = make_package("old", "0.0.0", [("0.2.0", True), ("0.1.0", True)])
        outcome = resolve(package, resolver=VersionResolver(notifier=flashes))
        assert outcome.version.num == "0.2.0"
        assert flashes.messages == []

    def test_max_version_missing_from_list_uses_first_record(self):
        package = make_package("gap", "5.0.0", [("4.0.0", False), ("3.0.0", False)])
        assert resolve(package).version.num == "4.0.0"


class TestRequestedVersion:
    def test_exact_match(self, foo, flashes):
        outcome = resolve(foo, "2.0.0-beta.1", VersionResolver(notifier=flashes))
        assert outcome.version.num == "2.0.0-beta.1"
        assert flashes.messages == []

    def test_yanked_version_resolvable_by_exact_request(self):
        package = make_package("baz", "1.2.0", [("1.2.0", False), ("1.1.0", True)])
        assert resolve(package, "1.1.0").version.num == "1.1.0"

    def test_missing_version_notifies_and_falls_back_to_max(self, foo, flashes):
        outcome = resolve(foo, "9.9.9", VersionResolver(notifier=flashes))
        assert flashes.messages == ["Version '9.9.9' of crate 'foo' does not exist"]
        assert outcome.version.num == "2.0.0-beta.1"
        assert outcome.not_found == "9.9.9"

    def test_missing_version_falls_back_to_first_record(self, flashes):
        package = make_package("gap", "5.0.0", [("4.0.0", False), ("3.0.0", False)])
        outcome = resolve(package, "1.0.0", VersionResolver(notifier=flashes))
        assert outcome.version.num == "4.0.0"
        assert len(flashes.messages) == 1

    def test_identifier_equality_not_semver_equality(self, flashes):
        package = make_package("short", "1.0.0", [("1.0.0", False)])
        resolve(package, "1.0", VersionResolver(notifier=flashes))
        assert flashes.messages == ["Version '1.0' of crate 'short' does not exist"]


class TestInvariants:
    def test_returned_record_belongs_to_package(self, foo):
        for token in (None, "1.0.0", "nope"):
            outcome = resolve(foo, token)
            assert any(outcome.version is record for record in foo.versions)

    def test_versions_not_reordered(self, foo):
        before = list(foo.versions)
        resolve(foo, "nope")
        assert foo.versions == before

    def test_empty_version_list_raises(self):
        package = PackageSummary(name="empty", max_version="0.0.0", versions=[])
        with pytest.raises(NoVersionsError):
            resolve(package)


class TestFallbackToken:
    def test_literal_for_stable_max(self):
        token, degraded = fallback_token(make_package("a", "1.0.0", [("1.0.0", False)]))
        assert token == LiteralToken("1.0.0")
        assert not degraded

    def test_record_for_scanned_version(self, foo):
        token, _ = fallback_token(foo)
        assert isinstance(token, RecordToken)
        assert token.num == "1.0.0"


class TestProbeScheduling:
    def test_probe_not_awaited_by_resolve(self, foo):
        probe = FakeProbe()

        async def _run():
            gate = probe.gate = asyncio.Event()
            resolver = VersionResolver(notifier=FlashQueue(), probe=probe)
            outcome = await resolver.resolve(foo)
            assert outcome.version.num == "1.0.0"
            assert not outcome.documentation_probe.done()
            gate.set()
            update = await outcome.documentation_probe
            await asyncio.sleep(0)
            return update

        update = asyncio.run(_run())
        assert probe.calls == [("foo", "1.0.0")]
        assert update.url == "https://docs.rs/foo/1.0.0/"
        assert foo.documentation == "https://docs.rs/foo/1.0.0/"

    def test_probe_uses_requested_version(self, foo):
        probe = FakeProbe()

        async def _run():
            resolver = VersionResolver(notifier=FlashQueue(), probe=probe)
            outcome = await resolver.resolve(foo, "2.0.0-beta.1")
            await outcome.documentation_probe

        asyncio.run(_run())
        assert probe.calls == [("foo", "2.0.0-beta.1")]

    def test_probe_failure_does_not_change_outcome(self, foo):
        probe = FakeProbe(error=RuntimeError("boom"))

        async def _run():
            resolver = VersionResolver(notifier=FlashQueue(), probe=probe)
            outcome = await resolver.resolve(foo)
            assert await outcome.documentation_probe is None
            return outcome

        outcome = asyncio.run(_run())
        assert outcome.version.num == "1.0.0"
        assert foo.documentation is None

    def test_custom_update_handler(self, foo):
        received = []

        async def _run():
            resolver = VersionResolver(
                notifier=FlashQueue(), probe=FakeProbe(), on_documentation_update=received.append
            )
            outcome = await resolver.resolve(foo)
            await outcome.documentation_probe
            await asyncio.sleep(0)

        asyncio.run(_run())
        assert [u.url for u in received] == ["https://docs.rs/foo/1.0.0/"]
        assert foo.documentation is None

    def test_no_probe_configured(self, foo):
        outcome = resolve(foo)
        assert outcome.documentation_probe is None
