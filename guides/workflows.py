"""Step-by-step development workflows."""
from __future__ import annotations

from typing import List, Optional, Tuple

from corpus import Workflow, WorkflowCorpus
from fuzzy_search import IndexCache, WeightedField
from guides.common import IndexedGuide, bullets, disambiguation, shorten


def _describe(w: Workflow) -> Tuple[str, str, str]:
    return w.name, f"{len(w.steps)} steps", w.description


class Workflows(IndexedGuide[Workflow]):
    fields = (
        WeightedField("name", 0.5),
        WeightedField("description", 0.35),
        WeightedField("steps.title", 0.15),
    )

    def __init__(self, corpus: WorkflowCorpus, cache: Optional[IndexCache[Workflow]] = None):
        self.corpus = corpus
        super().__init__(cache)

    def _records(self) -> List[Workflow]:
        return self.corpus.workflows

    def names(self) -> List[str]:
        return [w.name for w in self.corpus.workflows]

    # ------------------------------------------------------------------
    def explain(self, workflow: str) -> str:
        if not workflow or not workflow.strip():
            return "Please provide a workflow name to search for."

        chosen, matches = self.resolve(workflow)
        if not matches:
            return f'Workflow "{workflow}" not found.\n\nAvailable workflows: {", ".join(self.names())}'
        if chosen is None:
            return disambiguation(
                "workflows", workflow, matches, _describe,
                "Please use the exact workflow name from the list above.",
            )
        return self.render(chosen.record)

    @staticmethod
    def render(w: Workflow) -> str:
        text = f"# {w.name}\n\n{w.description}\n\n"

        if w.prerequisites:
            text += f"## Prerequisites\n\n{bullets(w.prerequisites)}\n\n"

        text += "## Steps\n\n"
        for i, step in enumerate(w.steps, start=1):
            text += f"{i}. **{step.title}**\n\n"
            text += f"{step.description}\n\n"
            if step.code:
                text += f"```typescript\n{step.code}\n```\n\n"
            if step.important:
                text += f"> **Important:** {' '.join(step.important)}\n\n"

        if w.commonIssues:
            text += f"## Common Issues\n\n{bullets(w.commonIssues)}\n\n"
        if w.relatedWorkflows:
            text += f"## Related Workflows\n\n{bullets(w.relatedWorkflows)}\n"
        return text

    @staticmethod
    def summary(w: Workflow, steps: int = 3) -> str:
        text = f"## {w.name}\n\n{shorten(w.description, 200)}\n\n"
        if w.steps:
            text += "**Steps:**\n"
            text += bullets(s.title for s in w.steps[:steps]) + "\n"
            if len(w.steps) > steps:
                text += f"- ... and {len(w.steps) - steps} more\n"
            text += "\n"
        return text
