"""NiceGUI chat interface with image attachments."""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

import httpx
from nicegui import events, ui

API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '3000')}")
REQUEST_TIMEOUT = 120.0

CUSTOM_CSS = """
<style>
    body { background: #eef2f7; }

    .app-container {
        background: white;
        border-radius: 14px;
        box-shadow: 0 4px 16px rgba(15, 23, 42, 0.08);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #0f766e 0%, #0e7490 100%); }

    .message-user {
        background: #0e7490;
        color: white;
        border-radius: 16px 16px 4px 16px;
    }

    .message-assistant {
        background: #f1f5f9;
        color: #0f172a;
        border-radius: 16px 16px 16px 4px;
    }

    .message-assistant .nicegui-markdown p { margin: 0.25rem 0; }
    .message-error { background: #fef2f2; color: #991b1b; }

    .thinking-dot {
        width: 7px; height: 7px;
        background: #0e7490;
        border-radius: 50%;
        animation: pulse 1.2s infinite ease-in-out;
    }
    .thinking-dot:nth-child(2) { animation-delay: 0.15s; }
    .thinking-dot:nth-child(3) { animation-delay: 0.3s; }

    @keyframes pulse {
        0%, 80%, 100% { opacity: 0.3; }
        40% { opacity: 1; }
    }
</style>
"""


@dataclass
class Attachment:
    """An image already forwarded to Coze."""

    file_id: str
    name: str


@dataclass
class ChatSession:
    """Chat state for one browser tab. History itself lives on Coze."""

    messages: list[dict] = field(default_factory=list)
    attachment: Attachment | None = None
    is_waiting: bool = False

    def add_message(self, role: str, content: str, *, error: bool = False) -> None:
        self.messages.append({
            "role": role,
            "content": content,
            "error": error,
            "time": datetime.now().strftime("%H:%M"),
        })


def _error_text(response: httpx.Response) -> str:
    """Pull a readable message out of a failed relay response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text or f"HTTP {response.status_code}"


async def upload_image(
    content: bytes,
    filename: str,
    content_type: str,
    on_uploaded: Callable[[Attachment], None],
    on_error: Callable[[str], None],
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Send an image to /upload and report the attachment it becomes."""
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
        try:
            response = await client.post(
                f"{API_BASE_URL}/upload",
                files={"file": (filename, content, content_type)},
            )
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")
            return

    if not response.is_success:
        on_error(_error_text(response))
        return
    on_uploaded(Attachment(file_id=response.json()["file_id"], name=filename))


async def request_answer(
    query: str,
    file_id: str | None,
    on_answer: Callable[[str], None],
    on_error: Callable[[str], None],
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Ask /chat for an answer. The relay replies once the stream is done."""
    payload: dict[str, str] = {"query": query}
    if file_id:
        payload["file_id"] = file_id

    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
        try:
            response = await client.post(f"{API_BASE_URL}/chat", json=payload)
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")
            return

    if not response.is_success:
        on_error(_error_text(response))
        return

    try:
        answer = response.json()["answer"]
    except (ValueError, KeyError, TypeError):
        on_error("Invalid response from relay")
        return
    on_answer(answer)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    attachment_row: ui.row
    input_field: ui.textarea
    send_btn: ui.button
    uploader: ui.upload

    def render_message(msg: dict) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        if msg["error"]:
            bubble += " message-error"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-2 {bubble}"):
                    if is_user:
                        ui.label(msg["content"]).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.markdown(msg["content"]).classes("text-sm")
                ui.label(msg["time"]).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-2"):
                    ui.icon("chat_bubble_outline").classes("text-5xl text-gray-300")
                    ui.label("Ask a question or attach an image").classes("text-gray-400")
            for msg in session.messages:
                render_message(msg)

    def refresh_attachment() -> None:
        attachment_row.clear()
        if session.attachment is None:
            return
        with attachment_row:
            ui.chip(
                session.attachment.name,
                icon="image",
                removable=True,
                on_value_change=lambda _: clear_attachment(),
            ).props("outline color=teal")

    def clear_attachment() -> None:
        session.attachment = None
        refresh_attachment()

    def render_thinking() -> ui.row:
        with ui.row().classes("w-full justify-start") as row:
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("gap-1 items-center"):
                    for _ in range(3):
                        ui.element("div").classes("thinking-dot")
        return row

    def set_waiting(waiting: bool) -> None:
        session.is_waiting = waiting
        if waiting:
            send_btn.disable()
        else:
            send_btn.enable()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        def on_uploaded(attachment: Attachment) -> None:
            session.attachment = attachment
            refresh_attachment()
            ui.notify(f"Attached {attachment.name}", type="positive")

        def on_error(error: str) -> None:
            ui.notify(f"Upload failed: {error}", type="negative")

        await upload_image(
            await e.file.read(),
            e.file.name,
            e.file.content_type or "application/octet-stream",
            on_uploaded,
            on_error,
        )
        uploader.reset()

    async def send_message() -> None:
        text = input_field.value.strip()
        attachment = session.attachment
        if session.is_waiting or (not text and attachment is None):
            return

        input_field.value = ""
        set_waiting(True)

        shown = text if attachment is None else f"{text}\n[image: {attachment.name}]".strip()
        session.add_message("user", shown)
        clear_attachment()
        refresh_messages()

        with messages_container:
            thinking = render_thinking()

        def on_answer(answer: str) -> None:
            session.add_message("assistant", answer)

        def on_error(error: str) -> None:
            session.add_message("assistant", f"Error: {error}", error=True)
            ui.notify(error, type="negative")

        try:
            await request_answer(
                text, attachment.file_id if attachment else None, on_answer, on_error
            )
        finally:
            thinking.delete()
            set_waiting(False)
            refresh_messages()

    def new_chat() -> None:
        session.messages.clear()
        clear_attachment()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("Coze Assistant").classes("text-lg font-semibold text-white")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        with (
            ui.scroll_area().classes("flex-grow w-full bg-slate-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-3")
            refresh_messages()

        with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
            attachment_row = ui.row().classes("gap-2")
            with ui.row().classes("w-full gap-3 items-end no-wrap"):
                uploader = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props("accept=image/* flat dense hide-upload-btn")
                    .classes("w-40")
                )
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=teal"
                )

