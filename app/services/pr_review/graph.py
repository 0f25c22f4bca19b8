"""
PR Review Graph.

Builds the LangGraph StateGraph for one review cycle:
files -> diff -> review -> persist -> comment -> CI -> merge | skip.
"""

from langgraph.graph import StateGraph, START, END

from app.services.pr_review.context import Ctx
from app.services.pr_review.nodes import (
    fetch_changed_files,
    fetch_diff,
    review_changes,
    persist_review,
    post_review_comment,
    check_ci,
    route_merge,
    merge_pr,
    skip_merge,
)
from app.services.pr_review.state import ReviewCycleState


# 1. Initialize Graph with context schema
workflow = StateGraph(ReviewCycleState, context_schema=Ctx)

# 2. Add Nodes
workflow.add_node("fetch_changed_files", fetch_changed_files)
workflow.add_node("fetch_diff", fetch_diff)
workflow.add_node("review_changes", review_changes)
workflow.add_node("persist_review", persist_review)
workflow.add_node("post_review_comment", post_review_comment)
workflow.add_node("check_ci", check_ci)
workflow.add_node("merge_pr", merge_pr)
workflow.add_node("skip_merge", skip_merge)

# 3. Add Edges
workflow.add_edge(START, "fetch_changed_files")
workflow.add_edge("fetch_changed_files", "fetch_diff")
workflow.add_edge("fetch_diff", "review_changes")
workflow.add_edge("review_changes", "persist_review")
workflow.add_edge("persist_review", "post_review_comment")
workflow.add_edge("post_review_comment", "check_ci")
workflow.add_conditional_edges("check_ci", route_merge, ["merge_pr", "skip_merge"])
workflow.add_edge("merge_pr", END)
workflow.add_edge("skip_merge", END)

# 4. Compile
pr_review_graph = workflow.compile()
