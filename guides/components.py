"""Guides for building React UI components on top of the Orderly SDK."""
from __future__ import annotations

from typing import List, Optional, Tuple

from corpus import ComponentCorpus, ComponentGuide
from fuzzy_search import IndexCache, WeightedField
from guides.common import IndexedGuide, bullets, capitalize, disambiguation

COMPLEXITIES = ("minimal", "standard", "advanced")


def _describe(c: ComponentGuide) -> Tuple[str, str, str]:
    return c.name, ", ".join(c.keyHooks[:2]), c.description


class ComponentGuides(IndexedGuide[ComponentGuide]):
    fields = (
        WeightedField("name", 0.5),
        WeightedField("description", 0.35),
        WeightedField("keyHooks", 0.15),
    )

    def __init__(self, corpus: ComponentCorpus, cache: Optional[IndexCache[ComponentGuide]] = None):
        self.corpus = corpus
        super().__init__(cache)

    def _records(self) -> List[ComponentGuide]:
        return self.corpus.components

    def names(self) -> List[str]:
        return [c.name for c in self.corpus.components]

    # ------------------------------------------------------------------
    def get_guide(self, component: str, complexity: str = "standard") -> str:
        if not component or not component.strip():
            return "Please provide a component name to search for."

        chosen, matches = self.resolve(component)
        if not matches:
            return f'Component "{component}" not found.\n\nAvailable components: {", ".join(self.names())}'
        if chosen is None:
            return disambiguation(
                "components", component, matches, _describe,
                "Please specify a specific component name.",
            )
        return self.render(chosen.record, complexity)

    @staticmethod
    def render(guide: ComponentGuide, complexity: str = "standard") -> str:
        text = f"# Building a {guide.name}\n\n{guide.description}\n\n"

        if guide.requiredPackages:
            text += f"## Required Packages\n\n```bash\nnpm install {' '.join(guide.requiredPackages)}\n```\n\n"

        if guide.keyHooks:
            text += "## Key Hooks\n\n"
            text += bullets(f"`{h}`" for h in guide.keyHooks) + "\n\n"

        variant = guide.variant(complexity)
        if variant is not None:
            text += f"## {capitalize(variant.complexity)} Implementation\n\n"
            text += f"{variant.description}\n\n"
            if variant.additionalImports:
                text += "### Additional Imports\n\n```typescript\n" + "\n".join(variant.additionalImports) + "\n```\n\n"
            text += f"### Code Example\n\n```tsx\n{variant.code}\n```\n\n"
            if variant.tips:
                text += f"### Implementation Tips\n\n{bullets(variant.tips)}\n\n"

        if guide.stylingNotes:
            text += f"## Styling Notes\n\n{guide.stylingNotes}\n\n"
        if guide.commonMistakes:
            text += f"## Common Mistakes to Avoid\n\n{bullets(guide.commonMistakes)}\n\n"
        if guide.relatedComponents:
            text += f"## Related Components\n\n{bullets(guide.relatedComponents)}\n"
        return text
