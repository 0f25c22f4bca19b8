"""End-to-end review cycles through the review graph with fake collaborators."""

import json

import httpx
import pytest
from langchain_core.runnables import RunnableLambda

from app.integrations.github.client import GitHubClient
from app.services.pr_review.actions import FAILURE_COMMENT, MERGED_COMMENT
from app.services.pr_review.orchestrator import PRReviewOrchestrator
from app.services.pr_review.reviewer import AIReviewer
from app.services.pr_review.schemas import ReviewStage

from tests.conftest import ALLOWLIST, FakeGitHub, FakeStore, fake_llm


def _orchestrator(github, store, *responses):
    reviewer = AIReviewer(fake_llm(*(responses or ("PASS: safe",))))
    return PRReviewOrchestrator(
        github=github, reviewer=reviewer, store=store, allowed_prefixes=ALLOWLIST
    )


def _http_github(handler):
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://api.github.com"
    )
    return GitHubClient(token="ghp-test", owner="octo", repo="server", client=http)


def _unavailable(_prompt):
    raise ConnectionError("api.openai.com unreachable")


class TestMergedCycle:
    async def test_allowlisted_pass_clean_merges(self):
        github = FakeGitHub(files=["docs/readme.md"], mergeable=True, mergeable_state="clean")
        store = FakeStore()

        outcome = await _orchestrator(github, store, "PASS: safe").run(42)

        assert outcome.stage is ReviewStage.MERGED
        assert outcome.merged is True
        assert outcome.decision.should_merge is True
        assert github.merged == [42]
        assert len(store.records) == 1
        assert store.records[0].pr_number == 42
        assert store.records[0].review_result == "PASS: safe"
        assert store.records[0].files_changed == ["docs/readme.md"]
        assert len(github.comments) == 2
        assert github.comments[0][1].startswith("🤖 **AI Review Result**\n\nPASS: safe")
        assert github.comments[1] == (42, MERGED_COMMENT)

    async def test_side_effects_run_in_order(self):
        github = FakeGitHub()

        await _orchestrator(github, FakeStore()).run(1)

        assert github.calls == [
            "get_pr_files",
            "get_pr_diff",
            "post_pr_comment",
            "get_pr",
            "merge_pr",
            "post_pr_comment",
        ]

    async def test_merge_notice_failure_still_merged(self):
        github = FakeGitHub(fail_on={"post_pr_comment"})

        outcome = await _orchestrator(github, FakeStore()).run(1)

        assert outcome.stage is ReviewStage.MERGED
        assert github.merged == [1]


    async def test_empty_write_responses_still_merge(self):
        posted = []
        merged = []

        def handler(request):
            path = request.url.path
            if path.endswith("/files"):
                return httpx.Response(200, json=[{"filename": "docs/readme.md"}])
            if path.endswith("/comments"):
                posted.append(json.loads(request.content)["body"])
                return httpx.Response(201, content=b"")
            if path.endswith("/merge"):
                merged.append(path)
                return httpx.Response(200, content=b"")
            if request.headers["Accept"] == "application/vnd.github.v3.diff":
                return httpx.Response(200, text="diff --git a/docs/readme.md b/docs/readme.md")
            return httpx.Response(200, json={"mergeable": True, "mergeable_state": "clean"})

        outcome = await _orchestrator(_http_github(handler), FakeStore()).run(42)

        assert outcome.stage is ReviewStage.MERGED
        assert merged == ["/repos/octo/server/pulls/42/merge"]
        assert posted[-1] == MERGED_COMMENT


class TestNotMergedCycle:
    @pytest.mark.parametrize("response", ["PASS: safe", "FAIL: remote code execution"])
    @pytest.mark.parametrize(
        "mergeable,state", [(True, "clean"), (False, "dirty"), (None, "unknown")]
    )
    async def test_file_outside_allowlist_never_merges(self, response, mergeable, state):
        github = FakeGitHub(
            files=["src/server.lua", "docs/x.md"], mergeable=mergeable, mergeable_state=state
        )
        store = FakeStore()

        outcome = await _orchestrator(github, store, response).run(7)

        assert outcome.stage is ReviewStage.NOT_MERGED
        assert outcome.decision.eligible is False
        assert outcome.decision.should_merge is False
        assert github.merged == []
        assert len(store.records) == 1
        assert len(github.comments) == 1
        assert github.comments[0][1].endswith("⚠️ Files outside allowlisted paths detected")

    async def test_ai_fail_blocks_merge(self):
        github = FakeGitHub()

        outcome = await _orchestrator(github, FakeStore(), "FAIL: hardcoded secret").run(3)

        assert outcome.stage is ReviewStage.NOT_MERGED
        assert outcome.verdict.passed is False
        assert github.merged == []

    @pytest.mark.parametrize("state", ["unstable", "blocked", "behind"])
    async def test_ci_not_clean_blocks_merge(self, state):
        github = FakeGitHub(mergeable=True, mergeable_state=state)

        outcome = await _orchestrator(github, FakeStore()).run(3)

        assert outcome.stage is ReviewStage.NOT_MERGED
        assert outcome.decision.clean is False

    async def test_ai_unavailable_is_recorded_as_fail(self):
        github = FakeGitHub()
        store = FakeStore()
        reviewer = AIReviewer(RunnableLambda(_unavailable))
        orchestrator = PRReviewOrchestrator(github, reviewer, store, ALLOWLIST)

        outcome = await orchestrator.run(9)

        assert outcome.stage is ReviewStage.NOT_MERGED
        assert store.records[0].review_result == "FAIL: AI review service unavailable"
        assert "FAIL: AI review service unavailable" in github.comments[0][1]

    async def test_persistence_outage_still_comments(self):
        github = FakeGitHub(files=["src/main.lua"])

        outcome = await _orchestrator(github, FakeStore(fail=True)).run(5)

        assert outcome.stage is ReviewStage.NOT_MERGED
        assert len(github.comments) == 1

    async def test_review_comment_failure_does_not_stop_cycle(self):
        github = FakeGitHub(files=["src/main.lua"], fail_on={"post_pr_comment"})

        outcome = await _orchestrator(github, FakeStore()).run(5)

        assert outcome.stage is ReviewStage.NOT_MERGED
        assert "get_pr" in github.calls


class TestFailedCycle:
    async def test_diff_fetch_error_fails_without_record(self):
        github = FakeGitHub(fail_on={"get_pr_diff"})
        store = FakeStore()

        outcome = await _orchestrator(github, store).run(11)

        assert outcome.stage is ReviewStage.FAILED
        assert outcome.error
        assert store.records == []
        assert github.comments == [(11, FAILURE_COMMENT)]
        assert github.merged == []

    async def test_files_fetch_error_fails_without_record(self):
        github = FakeGitHub(fail_on={"get_pr_files"})
        store = FakeStore()

        outcome = await _orchestrator(github, store).run(11)

        assert outcome.stage is ReviewStage.FAILED
        assert store.records == []
        assert "get_pr_diff" not in github.calls

    async def test_ci_query_error_fails_after_single_record(self):
        github = FakeGitHub(fail_on={"get_pr"})
        store = FakeStore()

        outcome = await _orchestrator(github, store).run(11)

        assert outcome.stage is ReviewStage.FAILED
        assert len(store.records) == 1
        assert github.comments[-1] == (11, FAILURE_COMMENT)
        assert github.merged == []

    async def test_merge_error_fails_and_reports(self):
        github = FakeGitHub(fail_on={"merge_pr"})

        outcome = await _orchestrator(github, FakeStore()).run(11)

        assert outcome.stage is ReviewStage.FAILED
        assert outcome.merged is False
        assert github.comments[-1] == (11, FAILURE_COMMENT)
        assert MERGED_COMMENT not in [body for _, body in github.comments]

    async def test_failure_notice_error_is_swallowed(self):
        github = FakeGitHub(fail_on={"get_pr_files", "post_pr_comment"})

        outcome = await _orchestrator(github, FakeStore()).run(11)

        assert outcome.stage is ReviewStage.FAILED
        assert github.comments == []

    async def test_empty_comment_response_still_fails_cleanly(self):
        posted = []

        def handler(request):
            if request.url.path.endswith("/files"):
                return httpx.Response(502, text="Bad Gateway")
            if request.url.path.endswith("/comments"):
                posted.append(json.loads(request.content)["body"])
                return httpx.Response(201, content=b"")
            raise AssertionError(f"unexpected request {request.method} {request.url}")

        outcome = await _orchestrator(_http_github(handler), FakeStore()).run(11)

        assert outcome.stage is ReviewStage.FAILED
        assert posted == [FAILURE_COMMENT]


class TestDeterminism:
    async def test_same_upstream_gives_same_decision(self):
        first = await _orchestrator(FakeGitHub(), FakeStore(), "PASS: safe").run(2)
        second = await _orchestrator(FakeGitHub(), FakeStore(), "PASS: safe").run(2)

        assert first.decision == second.decision

    async def test_one_orchestrator_serves_many_prs(self):
        github = FakeGitHub()
        store = FakeStore()
        orchestrator = _orchestrator(github, store, "PASS: safe")

        await orchestrator.run(1)
        await orchestrator.run(2)

        assert github.merged == [1, 2]
        assert [r.pr_number for r in store.records] == [1, 2]
