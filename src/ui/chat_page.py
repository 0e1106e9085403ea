"""NiceGUI chat interface for the Kimi assistant."""

from nicegui import events, ui

from src.ui.session import ChatSession, Message

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: linear-gradient(135deg, #f8fafc 0%, #eff6ff 100%); min-height: 100vh; }

    .app-container {
        background: rgba(255, 255, 255, 0.6);
        backdrop-filter: blur(16px);
        border: 1px solid rgba(255, 255, 255, 0.3);
        border-radius: 16px;
        box-shadow: 0 20px 40px rgba(0, 0, 0, 0.12);
        overflow: hidden;
    }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 16px 16px 4px 16px;
    }

    .message-assistant {
        background: #e5e7eb;
        color: #1f2937;
        border-radius: 16px 16px 16px 4px;
    }

    .avatar-user { background: #2563eb; }
    .avatar-assistant { background: #4f46e5; }

    .drop-zone {
        border: 2px dashed #60a5fa;
        border-radius: 12px;
    }

    /* Reply formatting */
    .message-assistant strong { font-weight: 600; }
    .message-assistant em { font-style: italic; }
    .message-assistant li { margin-left: 1rem; list-style: disc; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    uploader: ui.upload

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        avatar_classes = f"w-8 h-8 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.label("U" if is_user else "A").classes("text-white text-sm")

    def render_message(msg: Message) -> None:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-2 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.element("div").classes(f"max-w-[75%] px-4 py-2 shadow {bubble}"):
                if msg.file and msg.file.preview:
                    ui.image(msg.file.preview).classes("w-40 rounded-md mb-2")
                elif msg.file:
                    ui.label(f"📄 {msg.file.name}").classes("text-sm mb-2")
                if is_user:
                    ui.label(msg.text).classes("whitespace-pre-wrap break-words")
                else:
                    # Assistant text is already HTML from format_answer
                    ui.html(msg.text, sanitize=False).classes("text-sm leading-relaxed break-words")
                ui.label(msg.time).classes("text-xs opacity-70")
            if is_user:
                render_avatar(True)

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-2 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-2 shadow"):
                ui.label("Typing…").classes("text-sm")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages and not session.loading:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Ask a question or drop a file").classes("text-lg text-gray-400")
            for msg in session.messages:
                render_message(msg)
            if session.loading:
                render_typing_indicator()

    @ui.refreshable
    def staged_view() -> None:
        staged = session.staged
        if staged is None:
            return
        with ui.row().classes("w-full items-center justify-center gap-2 mb-2"):
            if staged.is_image:
                ui.image(staged.preview).classes("w-32 rounded-lg shadow")
            else:
                ui.label(f"📄 {staged.name}").classes("text-sm text-gray-700")
            ui.button(icon="close", on_click=remove_staged).props("flat round dense size=sm")

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        session.stage_file(e.file.name, content, e.file.content_type)
        uploader.reset()
        staged_view.refresh()

    def remove_staged() -> None:
        session.clear_staged_file()
        staged_view.refresh()

    async def send_message() -> None:
        text = input_field.value or ""
        if not session.can_send(text):
            return

        input_field.value = ""
        send_btn.disable()
        try:
            await session.send(text, on_pending=refresh_messages)
        finally:
            send_btn.enable()
            staged_view.refresh()
            refresh_messages()

    def new_chat() -> None:
        session.reset()
        input_field.value = ""
        staged_view.refresh()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full px-6 py-4 items-center justify-between border-b"):
            with ui.column().classes("gap-0"):
                ui.label("Kimi Assistant").classes("text-xl font-bold text-gray-800")
                ui.label("kimi-latest · files read with file-extract").classes(
                    "text-xs text-gray-500"
                )
            ui.button(icon="close", on_click=new_chat).props("flat round").tooltip(
                "New chat"
            )

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full"),
            ui.column().classes("w-full px-6 py-4"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Input
        with ui.column().classes("w-full px-6 py-4 border-t gap-2"):
            staged_view()
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props("flat bordered accept=*/* label='📎 Drop image / file or click'")
                .classes("w-full drop-zone")
            )
            with ui.row().classes("w-full gap-3 items-end no-wrap"):
                input_field = (
                    ui.textarea(placeholder="Ask or drop a file…")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.exact.prevent", send_message)
                )
                send_btn = ui.button("Send", on_click=send_message).props("unelevated color=primary")
            ui.label("Shift+Enter new line · Enter send").classes("text-xs text-gray-500")


def main() -> None:
    ui.run(title="Kimi Assistant", port=8080, reload=False)


if __name__ == "__main__":
    main()
