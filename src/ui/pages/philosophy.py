"""Philosophy section (deep) - free-floating thoughts and their comment threads."""

import logging
from collections.abc import Callable

from nicegui import ui
from nicegui.elements.column import Column
from nicegui.element import Element

from src.memory.content import Comment, Thought, ThoughtDraft
from src.services import ServiceContainer
from src.services.comment_service import can_submit, count_public
from src.ui.components.confirm_dialog import confirm_delete
from src.ui.state import AppState
from src.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


class PhilosophySection:
    """Canvas of thoughts positioned by percentage coordinates.

    Features:
    - Detail dialog with the comment thread and a comment form
    - Comment moderation (approve/delete) in edit mode
    - Thought add/edit/delete in edit mode
    """

    def __init__(
        self,
        state: AppState,
        services: ServiceContainer,
        on_change: Callable[[], None] | None = None,
    ):
        """Initialize philosophy section.

        Args:
            state: Application state.
            services: Service container.
            on_change: Called after thoughts change; defaults to re-rendering this section.
        """
        self.state = state
        self.services = services
        self.on_change = on_change or self.refresh

        # UI references
        self._canvas: Element | None = None
        self._toolbar: Element | None = None
        self._thread: Column | None = None

    def build(self) -> None:
        """Build the philosophy section UI."""
        with ui.element("section").props("id=deep").classes("w-full py-16"):
            with ui.column().classes("w-full max-w-5xl mx-auto gap-6 px-4"):
                ui.label("Deep").classes("text-sm uppercase tracking-widest text-pink-400")
                ui.label("Thoughts").classes("text-3xl font-bold")
                self._toolbar = ui.row().classes("w-full")
                self._canvas = ui.element("div").classes(
                    "relative w-full h-[600px] rounded-lg border border-gray-800"
                )
        self.refresh()

    def refresh(self) -> None:
        """Re-render the thought canvas from state."""
        if self._canvas is None or self._toolbar is None:
            return
        self._toolbar.clear()
        with self._toolbar:
            if self.state.is_edit_mode:
                ui.button("Add Thought", icon="add", on_click=lambda: self._open_form(None)).props(
                    "outline color=primary"
                )

        self._canvas.clear()
        with self._canvas:
            if not self.state.thoughts_loaded:
                ui.spinner(size="lg").classes("absolute left-1/2 top-1/2")
                return
            if not self.state.thoughts:
                ui.label("No thoughts yet").classes(
                    "absolute left-1/2 top-1/2 -translate-x-1/2 text-gray-500"
                )
                return
            for thought in self.state.thoughts:
                x, y = self.services.thoughts.placement_for(thought)
                with (
                    ui.element("div")
                    .classes(
                        "absolute -translate-x-1/2 -translate-y-1/2 cursor-pointer px-3 py-2 "
                        "rounded-full bg-pink-500/10 border border-pink-400/40 hover:bg-pink-500/20"
                    )
                    .style(f"left: {x:.2f}%; top: {y:.2f}%")
                    .on("click", lambda t=thought: self._open_detail(t))
                    .mark(f"thought-{thought.id}")
                ):
                    ui.label(thought.title).classes("text-sm")

    # ---------- Detail & comments ----------

    async def _open_detail(self, thought: Thought) -> None:
        self.state.select_thought(thought.id)

        def edit() -> None:
            dialog.close()
            self._open_form(thought)

        def delete() -> None:
            dialog.close()
            self._confirm_delete(thought)

        with ui.dialog() as dialog, ui.card().classes("w-full max-w-2xl"):
            with ui.row().classes("w-full items-center gap-2"):
                ui.label(thought.title).classes("text-2xl font-bold")
                ui.space()
                if self.state.is_edit_mode:
                    ui.button(icon="edit", on_click=edit).props("flat round dense").mark(
                        "edit-thought"
                    ).tooltip("Edit")
                    ui.button(icon="delete", on_click=delete).props(
                        "flat round dense color=negative"
                    ).mark("delete-thought").tooltip("Delete")
                ui.button(icon="close", on_click=dialog.close).props("flat round dense")
            ui.label(thought.content).classes("whitespace-pre-line")
            ui.separator()
            self._thread = ui.column().classes("w-full gap-2")
            self._build_comment_form(thought.id)
        dialog.on("hide", lambda: self._close_detail(thought.id))
        dialog.open()
        await self._load_comments(thought.id)

    def _close_detail(self, thought_id: str) -> None:
        if self.state.selected_thought_id == thought_id:
            self.state.select_thought(None)
        self._thread = None

    async def _load_comments(self, thought_id: str) -> None:
        comments = await self.services.comments.list_comments(
            thought_id, include_pending=self.state.is_edit_mode
        )
        self.state.apply_comments(thought_id, comments)
        if self.state.selected_thought_id == thought_id:
            self._render_thread(thought_id)

    def _render_thread(self, thought_id: str) -> None:
        if self._thread is None:
            return
        self._thread.clear()
        comments = self.state.comments
        with self._thread:
            ui.label(f"Comments ({count_public(comments)})").classes("text-lg font-semibold")
            if not comments:
                ui.label("No comments yet").classes("text-sm text-gray-500")
            for comment in comments:
                self._build_comment(thought_id, comment)

    def _build_comment(self, thought_id: str, comment: Comment) -> None:
        with ui.card().classes("w-full p-2"):
            with ui.row().classes("w-full items-center gap-2"):
                ui.label(comment.display_author).classes("text-sm font-medium")
                if comment.created_at:
                    ui.label(comment.created_at.strftime("%Y-%m-%d")).classes(
                        "text-xs text-gray-500"
                    )
                if not comment.is_public:
                    ui.badge("pending", color="orange")
                ui.space()
                if self.state.is_edit_mode:
                    if not comment.is_public:
                        ui.button(
                            icon="check",
                            on_click=lambda c=comment: self._approve(thought_id, c),
                        ).props("flat round dense size=sm color=positive").mark(
                            "approve-comment"
                        ).tooltip("Approve")
                    ui.button(
                        icon="delete",
                        on_click=lambda c=comment: self._delete_comment(thought_id, c),
                    ).props("flat round dense size=sm color=negative").mark(
                        "delete-comment"
                    ).tooltip("Delete")
            ui.label(comment.content).classes("text-sm whitespace-pre-line")

    def _build_comment_form(self, thought_id: str) -> None:
        with ui.column().classes("w-full gap-2 mt-2"):
            ui.label("Leave a comment").classes("text-sm text-gray-400")
            author = ui.input("Name (optional)").classes("w-full")
            content = ui.textarea("Comment").classes("w-full")

            async def submit() -> None:
                try:
                    stored = await self.services.comments.submit_comment(
                        thought_id, content.value, author.value
                    )
                except ValidationError as e:
                    ui.notify(str(e), type="warning")
                    return
                if stored is None:
                    ui.notify("Could not submit comment", type="negative")
                    return
                content.value = ""
                author.value = ""
                ui.notify("Thanks! Your comment will appear once approved.", type="positive")
                await self._load_comments(thought_id)

            ui.button("Submit", icon="send", on_click=submit).props("color=primary").mark(
                "submit-comment"
            ).bind_enabled_from(content, "value", backward=can_submit)

    async def _approve(self, thought_id: str, comment: Comment) -> None:
        if await self.services.comments.approve_comment(comment.id):
            ui.notify("Comment approved", type="positive")
        else:
            ui.notify("Could not approve comment", type="negative")
        await self._load_comments(thought_id)

    async def _delete_comment(self, thought_id: str, comment: Comment) -> None:
        if await self.services.comments.delete_comment(comment.id):
            ui.notify("Comment deleted", type="positive")
        else:
            ui.notify("Could not delete comment", type="negative")
        await self._load_comments(thought_id)

    # ---------- Thought editing ----------

    def _open_form(self, thought: Thought | None) -> None:
        """Add form when thought is None, otherwise edit form for it."""
        values = {
            "title": thought.title if thought else "",
            "content": thought.content if thought else "",
        }
        with ui.dialog() as dialog, ui.card().classes("w-full max-w-xl"):
            ui.label("Edit Thought" if thought else "Add Thought").classes("text-xl font-bold")
            ui.input("Title").bind_value(values, "title").classes("w-full")
            ui.textarea("Content").bind_value(values, "content").classes("w-full")

            async def save() -> None:
                title = (values["title"] or "").strip()
                if not title:
                    ui.notify("Title is required", type="warning")
                    return
                content = values["content"] or ""
                if thought is None:
                    created = await self.services.thoughts.create_thought(
                        ThoughtDraft(title=title, content=content)
                    )
                    if created is None:
                        ui.notify("Could not create thought", type="negative")
                        return
                    self.state.apply_thought_created(created)
                else:
                    if not await self.services.thoughts.update_thought(thought.id, title, content):
                        ui.notify("Could not save thought", type="negative")
                        return
                    self.state.apply_thought_updated(thought.id, title, content)
                dialog.close()
                self.on_change()

            with ui.row().classes("w-full justify-end gap-2"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", icon="check", on_click=save).props("color=primary")
        dialog.open()

    def _confirm_delete(self, thought: Thought) -> None:
        message = f'Delete "{thought.title}"?\n\nIts comments stay in storage.'

        async def do_delete() -> None:
            if await self.services.thoughts.delete_thought(thought.id):
                self.state.apply_thought_deleted(thought.id)
                ui.notify("Thought deleted", type="positive")
                self.on_change()
            else:
                ui.notify("Could not delete thought", type="negative")

        confirm_delete("Delete Thought?", message, do_delete)
