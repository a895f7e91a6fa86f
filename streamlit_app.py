"""Streamlit interface for the Resume Forge API."""

import streamlit as st
import streamlit.components.v1 as components
import httpx
import os
from typing import Any, Dict, List, Optional, Tuple
from resume_forge.services.resume_data_loader import ResumeDataLoader

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

# Page configuration
st.set_page_config(
    page_title="Resume Forge",
    page_icon="📄",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        margin-bottom: 1rem;
    }
</style>
""", unsafe_allow_html=True)

loader = ResumeDataLoader()


def fetch_templates(api_url: str) -> Tuple[List[str], str]:
    """
    Get the registered templates from the API.

    Args:
        api_url: API base URL

    Returns:
        Tuple of (template_ids, default_template_id)
    """
    try:
        with httpx.Client(timeout=5.0) as client:
            response = client.get(f"{api_url}/api/v1/templates")
            response.raise_for_status()
            data = response.json()
            return data["templates"], data["default"]
    except httpx.HTTPError as e:
        st.warning(f"Could not load templates: {str(e)}")
        return ["standard"], "standard"


def post_resume(api_url: str, path: str, record: Dict[str, Any], template_id: str) -> Optional[httpx.Response]:
    """
    Call one of the render endpoints.

    Args:
        api_url: API base URL
        path: Endpoint path
        record: Legacy resume record
        template_id: Template rules id

    Returns:
        The response if successful, None otherwise
    """
    try:
        with httpx.Client(timeout=60.0) as client:
            response = client.post(
                f"{api_url}{path}",
                json={"resume": record, "templateId": template_id},
            )
            response.raise_for_status()
            return response
    except httpx.HTTPStatusError as e:
        st.error(f"API error: {e.response.json().get('detail', str(e))}")
        return None
    except httpx.HTTPError as e:
        st.error(f"Error communicating with the API: {str(e)}")
        return None


def main():
    """Main Streamlit app."""

    st.markdown('<div class="main-header">📄 Resume Forge</div>', unsafe_allow_html=True)

    with st.sidebar:
        st.header("Configuration")
        api_url = st.text_input(
            "API URL",
            value=API_BASE_URL,
            help="Base URL of the FastAPI server"
        )

        st.divider()

        st.header("Server status")
        try:
            with httpx.Client(timeout=2.0) as client:
                response = client.get(f"{api_url}/health")
                if response.status_code == 200:
                    st.success("✅ FastAPI server is running")
                else:
                    st.warning(f"⚠️ Server answered with status {response.status_code}")
        except httpx.ConnectError:
            st.error("❌ FastAPI server is not running")
            st.code("uvicorn resume_forge.main:app --reload", language="bash")

    templates, default_template = fetch_templates(api_url)
    template_id = st.selectbox(
        "Template",
        templates,
        index=templates.index(default_template) if default_template in templates else 0,
    )

    sample = (loader.data_dir / "sample_resume.yaml").read_text(encoding="utf-8")
    source = st.text_area(
        "Resume data (YAML or JSON)",
        value=sample,
        height=400,
    )

    if not st.button("Render", type="primary", use_container_width=True):
        return

    try:
        record = loader.loads(source, source="editor")
    except ValueError as e:
        st.error(str(e))
        return

    layout_response = post_resume(api_url, "/api/v1/resume/layout", record, template_id)
    if layout_response is None:
        return
    notice = layout_response.json().get("notice")
    if notice:
        st.info(notice)

    preview_response = post_resume(api_url, "/api/v1/resume/preview", record, template_id)
    pdf_response = post_resume(api_url, "/api/v1/resume/pdf", record, template_id)

    if pdf_response is not None:
        st.download_button(
            label="📥 Download PDF",
            data=pdf_response.content,
            file_name="resume.pdf",
            mime="application/pdf",
            use_container_width=True,
        )

    if preview_response is not None:
        st.divider()
        st.header("Preview")
        components.html(preview_response.text, height=1100, scrolling=True)


if __name__ == "__main__":
    main()
