"""Gradio UI for the Photo Studio."""

import logging

import gradio as gr

from photostudio.core.catalog import DEFAULT_DEALER, default_showroom, list_dealers, showrooms_for
from photostudio.core.config import config
from photostudio.core.prompt_builder import BACKGROUND_LABELS, BACKGROUND_TYPES

from .handlers import (
    delete_history_item,
    generate_portraits,
    load_history_view,
    select_dealer,
    select_history_item,
)
from .models import HISTORY_HEADERS, StudioState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Sales Rep Photo Studio")

    with app:
        # Session state - one instance per user
        studio_state = gr.State(StudioState())

        gr.Markdown(
            """
            # Sales Rep Photo Studio
            ### 영업 사원 프로필 사진 생성
            """
        )

        with gr.Tabs():
            with gr.Tab("스튜디오", id="studio_tab"):
                create_studio_tab(studio_state)

            with gr.Tab("히스토리", id="history_tab") as history_tab:
                history_components = create_history_tab(studio_state)

        history_outputs = [
            history_components["gallery"],
            history_components["table"],
            history_components["status"],
            studio_state,
        ]

        # Cache first, then server truth, on page load and every time the tab opens
        app.load(fn=load_history_view, inputs=[studio_state], outputs=history_outputs)
        history_tab.select(fn=load_history_view, inputs=[studio_state], outputs=history_outputs)

    return app


def create_studio_tab(studio_state):
    """Create the studio (generation) tab UI.

    Args:
        studio_state: UI state component
    """
    with gr.Row():
        with gr.Column(scale=1):
            gr.Markdown("### 정보 입력")

            name_input = gr.Textbox(
                label="이름",
                placeholder="성함을 입력하세요",
            )

            with gr.Row():
                dealer_dropdown = gr.Dropdown(
                    label="딜러",
                    choices=list_dealers(),
                    value=DEFAULT_DEALER,
                )
                showroom_dropdown = gr.Dropdown(
                    label="전시장",
                    choices=showrooms_for(DEFAULT_DEALER),
                    value=default_showroom(DEFAULT_DEALER),
                )

            background_radio = gr.Radio(
                label="배경",
                choices=[(BACKGROUND_LABELS[key], key) for key in BACKGROUND_TYPES],
                value="solid",
            )

            gr.Markdown("### 사진 업로드\n*정면 사진 1장은 필수, 최대 3장까지 업로드할 수 있습니다.*")
            with gr.Row():
                input_image_1 = gr.Image(
                    label="사진 1 (필수)",
                    type="filepath",
                    sources=["upload", "clipboard"],
                    height=200,
                )
                input_image_2 = gr.Image(
                    label="사진 2 (선택)",
                    type="filepath",
                    sources=["upload", "clipboard"],
                    height=200,
                )
                input_image_3 = gr.Image(
                    label="사진 3 (선택)",
                    type="filepath",
                    sources=["upload", "clipboard"],
                    height=200,
                )

            generate_btn = gr.Button("프로필 사진 생성", variant="primary", size="lg")

        with gr.Column(scale=2):
            gr.Markdown("### 생성 결과")

            status_output = gr.Markdown(value="*정보를 입력하고 사진을 업로드하세요.*")

            with gr.Row():
                front_output = gr.Image(label="정면", type="pil", interactive=False)
                side_output = gr.Image(label="45도 측면", type="pil", interactive=False)
                full_output = gr.Image(label="전신", type="pil", interactive=False)

            download_files = gr.File(label="다운로드", file_count="multiple", interactive=False)

    # Event handlers
    dealer_dropdown.change(
        fn=select_dealer,
        inputs=[dealer_dropdown, studio_state],
        outputs=[showroom_dropdown, studio_state],
    )

    generate_btn.click(
        fn=generate_portraits,
        inputs=[
            name_input,
            dealer_dropdown,
            showroom_dropdown,
            background_radio,
            input_image_1,
            input_image_2,
            input_image_3,
            studio_state,
        ],
        outputs=[
            front_output,
            side_output,
            full_output,
            download_files,
            status_output,
            studio_state,
        ],
    )


def create_history_tab(studio_state):
    """Create the history tab UI.

    Args:
        studio_state: UI state component

    Returns:
        Dictionary of components needed by the tab-select handler
    """
    history_status = gr.Markdown(value="*히스토리를 불러오는 중...*")

    with gr.Row():
        with gr.Column(scale=2):
            history_gallery = gr.Gallery(
                label="생성 기록",
                columns=4,
                height=420,
                object_fit="contain",
                allow_preview=False,
            )

        with gr.Column(scale=1):
            gr.Markdown("### 선택한 기록")
            with gr.Row():
                selected_front = gr.Image(label="정면", type="pil", interactive=False)
                selected_side = gr.Image(label="45도 측면", type="pil", interactive=False)
                selected_full = gr.Image(label="전신", type="pil", interactive=False)

            with gr.Row():
                selected_id = gr.Number(label="기록 ID", precision=0, interactive=True)
                delete_btn = gr.Button("삭제", variant="stop")

    history_table = gr.Dataframe(
        headers=HISTORY_HEADERS,
        interactive=False,
        wrap=True,
    )

    # Event handlers
    history_gallery.select(
        fn=select_history_item,
        inputs=[studio_state],
        outputs=[selected_front, selected_side, selected_full, selected_id, studio_state],
    )

    delete_btn.click(
        fn=delete_history_item,
        inputs=[selected_id, studio_state],
        outputs=[history_gallery, history_table, history_status, studio_state],
    )

    return {
        "gallery": history_gallery,
        "table": history_table,
        "status": history_status,
    }


def main():
    """Main entry point for the application."""
    logger.info("Starting Sales Rep Photo Studio...")
    logger.info(
        f"Configuration: model={config.gemini_model}, api={config.api_base_url}, "
        f"cache={config.cache_path}, api_key_configured={config.has_api_key}"
    )

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
