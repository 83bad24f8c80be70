"""GitHub-flavoured grammar: tables, strikethrough and task lists"""

from dataclasses import dataclass

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin


@dataclass(frozen=True)
class Gfm:
    name: str = "gfm"
    task_lists: bool = True

    def configure(self, md: MarkdownIt) -> None:
        md.enable(["table", "strikethrough"])
        if self.task_lists:
            md.use(tasklists_plugin)
