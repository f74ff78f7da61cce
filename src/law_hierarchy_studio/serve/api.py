"""FastAPI application for Law Hierarchy Studio."""
from __future__ import annotations

import logging
import os
import uuid
from typing import AbstractSet, Any, Dict, Sequence

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from law_hierarchy_studio.config.constants import option_value
from law_hierarchy_studio.config.schema import AppConfig
from law_hierarchy_studio.data.element_loader import load_law_elements
from law_hierarchy_studio.data.law_elements import LawElement, LawElementTree, display_subtitle, display_title
from law_hierarchy_studio.hierarchy import (
    CascadingSelection,
    SelectionSession,
    build_hierarchy,
    filter_relevant,
    flatten_display,
    flatten_full,
)
from law_hierarchy_studio.llm import StudyAssistant, TextGenerator, build_generator
from law_hierarchy_studio.serve.schemas import (
    AskRequest,
    AskResponse,
    ContentResponse,
    CopyResponse,
    HealthResponse,
    OpenSessionRequest,
    OpenSessionResponse,
    RemoveRequest,
    RemoveResponse,
    SelectionResponse,
    ToggleRequest,
    TreeNodeResponse,
    TreeResponse,
)

logger = logging.getLogger(__name__)


def _tree_response(
    forest: Sequence[LawElementTree],
    rules: CascadingSelection,
    selected: AbstractSet[str] | None = None,
) -> list[TreeNodeResponse]:
    """Convert a forest into response nodes, with check states when a selection is given."""

    def _convert(node: LawElementTree) -> TreeNodeResponse:
        selectable = rules.is_selectable(node)
        state = None
        if selected is not None and selectable:
            state = rules.check_state(node, selected).value
        return TreeNodeResponse(
            id=node["id"],
            element_type=node["element_type"],
            element_number=node.get("element_number") or "",
            title=node.get("title") or "",
            display_title=display_title(node),
            subtitle=display_subtitle(node),
            selectable=selectable,
            state=state,
            children=[_convert(child) for child in node.get("children", [])],
        )

    return [_convert(root) for root in forest]


def _plain(elements: Sequence[LawElement]) -> list[dict[str, Any]]:
    """Return JSON-ready copies of element records."""

    return [dict(element) for element in elements]


def create_app(cfg: AppConfig, generator: TextGenerator | None = None) -> FastAPI:
    """Create FastAPI app wired with runtime dependencies.

    Args:
        cfg: Application configuration.
        generator: Text generator override; built from config when None.

    Returns:
        Configured FastAPI application.
    """

    app = FastAPI(title="Law Hierarchy Studio")
    cors_env = os.getenv("LAW_HIERARCHY_CORS_ORIGINS", "").strip()
    cors_origins = (
        [origin.strip() for origin in cors_env.split(",") if origin.strip()]
        if cors_env
        else ["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    elements = load_law_elements(cfg.data.elements_path)
    elements_by_law: Dict[str, list[LawElement]] = {}
    elements_by_id: Dict[str, LawElement] = {}
    for element in elements:
        elements_by_law.setdefault(element["law_id"], []).append(element)
        elements_by_id.setdefault(element["id"], element)

    rules = CascadingSelection(cfg.hierarchy.selectable_types)
    assistant = StudyAssistant(generator or build_generator(cfg.llm), max_depth=cfg.hierarchy.max_depth)
    sessions: Dict[str, SelectionSession] = {}

    def _law_elements(law_id: str) -> list[LawElement]:
        if law_id not in elements_by_law:
            raise HTTPException(status_code=404, detail=f"Unknown law: {law_id}")
        return elements_by_law[law_id]

    def _session(session_id: str) -> SelectionSession:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
        return session

    def _element(element_id: str) -> LawElement:
        element = elements_by_id.get(element_id)
        if element is None:
            raise HTTPException(status_code=404, detail=f"Unknown element: {element_id}")
        return element

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", model=cfg.llm.model, elements=len(elements))

    @app.post("/sessions", response_model=OpenSessionResponse)
    def open_session(body: OpenSessionRequest) -> OpenSessionResponse:
        """Open a law and start an empty selection."""

        law_id = body.law_id or cfg.data.default_law_id
        if not law_id:
            raise HTTPException(status_code=422, detail="law_id is required")
        law_elements = _law_elements(law_id)
        session_id = uuid.uuid4().hex
        sessions[session_id] = SelectionSession(
            law_id=law_id, elements=law_elements, rules=rules, max_depth=cfg.hierarchy.max_depth
        )
        logger.info("Opened session %s for law %s", session_id, law_id)
        return OpenSessionResponse(session_id=session_id, law_id=law_id, elements=len(law_elements))

    @app.get("/sessions/{session_id}/tree", response_model=TreeResponse)
    def session_tree(session_id: str) -> TreeResponse:
        session = _session(session_id)
        roots = _tree_response(session.hierarchy(), rules, session.selected)
        return TreeResponse(law_id=session.law_id, roots=roots)

    @app.post("/sessions/{session_id}/toggle", response_model=SelectionResponse)
    def toggle(session_id: str, body: ToggleRequest) -> SelectionResponse:
        session = _session(session_id)
        try:
            selected = session.toggle(body.element_id, body.checked)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown element: {body.element_id}") from None
        return SelectionResponse(session_id=session_id, selected_ids=sorted(selected))

    @app.post("/sessions/{session_id}/reset", response_model=SelectionResponse)
    def reset(session_id: str) -> SelectionResponse:
        session = _session(session_id)
        session.clear()
        return SelectionResponse(session_id=session_id, selected_ids=[])

    @app.post("/sessions/{session_id}/copy", response_model=CopyResponse)
    def copy_selection(session_id: str) -> CopyResponse:
        session = _session(session_id)
        copied = session.copy_selection()
        return CopyResponse(
            session_id=session_id,
            elements=_plain(copied),
            roots=_tree_response(session.copied_hierarchy(), rules),
        )

    @app.post("/sessions/{session_id}/copied/remove", response_model=RemoveResponse)
    def remove_copied(session_id: str, body: RemoveRequest) -> RemoveResponse:
        session = _session(session_id)
        removal = session.remove_copied(body.element_id)
        return RemoveResponse(session_id=session_id, removed_ids=removal.removed_ids, kept=_plain(removal.kept))

    @app.get("/laws/{law_id}/tree", response_model=TreeResponse)
    def law_tree(law_id: str, focus: list[str] | None = Query(None)) -> TreeResponse:
        """Return a law's forest, pruned around ``focus`` ids when given."""

        forest = build_hierarchy(_law_elements(law_id), max_depth=cfg.hierarchy.max_depth)
        if focus:
            forest = filter_relevant(forest, focus)
        return TreeResponse(law_id=law_id, roots=_tree_response(forest, rules))

    @app.get("/elements/{element_id}/content", response_model=ContentResponse)
    def element_content(element_id: str, mode: str = Query("display", pattern="^(display|full)$")) -> ContentResponse:
        element = _element(element_id)
        law_elements = elements_by_law[element["law_id"]]
        if mode == "full":
            text = flatten_full(element, law_elements, cfg.hierarchy.max_depth)
            shown = {"content": text, "truncated": False, "total_length": len(text)}
        else:
            shown = flatten_display(
                element,
                law_elements,
                max_chars=cfg.flatten.display_max_chars,
                ellipsis=cfg.flatten.ellipsis,
                max_depth=cfg.hierarchy.max_depth,
            )
        return ContentResponse(element_id=element_id, title=display_title(element), mode=mode, **shown)

    @app.post("/elements/{element_id}/ask", response_model=AskResponse)
    def ask(element_id: str, body: AskRequest) -> AskResponse:
        element = _element(element_id)
        law_elements = elements_by_law[element["law_id"]]
        try:
            result = assistant.run(
                body.tool,
                element,
                law_elements,
                question=body.question,
                question_type=body.question_type,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            logger.error("Study tool %s failed for %s: %s", body.tool, element_id, exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return AskResponse(element_id=element_id, tool=body.tool, answer=result.get("text", ""), usage=result.get("usage"))

    return app


def run_server(cfg: AppConfig, host: str | None = None, port: int | None = None) -> None:
    """Run the FastAPI server using uvicorn.

    Args:
        cfg: Application configuration.
        host: Optional host override.
        port: Optional port override.
    """
    import uvicorn

    logger.info("Serving with generator provider=%s", option_value(cfg.llm.provider))
    app = create_app(cfg)
    uvicorn.run(app, host=host or cfg.serve.host, port=port or cfg.serve.port)


__all__ = ["create_app", "run_server"]
