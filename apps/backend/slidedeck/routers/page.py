from __future__ import annotations

from html import escape

from fastapi import APIRouter
from fastapi.responses import Response

from ..config import MATHJAX_URL
from ..state import STATE

router = APIRouter()


_STYLE = """
      body { margin:0; font-family: Georgia, 'Times New Roman', serif; background:#fff; color:#222; }
      #presentation { position:relative; min-height:100vh; }
      #header { display:flex; align-items:center; gap:24px; padding:8px 16px; border-bottom:1px solid #ccc; }
      #navigation { display:flex; align-items:center; gap:6px; }
      .navigation-item svg { cursor:pointer; display:block; }
      #header-title { flex:1; font-size:22px; font-weight:bold; }
      #author { text-align:right; font-size:14px; }
      #slide { padding:24px 48px 48px; font-size:26px; }
      .list-diagram-slide { display:flex; flex-wrap:wrap; gap:32px; }
      .slide-items { flex:1; min-width:40%; }
      .item-cold { color:#999; }
      .footnotes { width:100%; font-size:16px; color:#555; border-top:1px solid #ddd; padding-top:8px; }
      #front-page img { display:block; }
      table.front-page td { padding:4px 12px; font-size:22px; }
"""

# The page only forwards input and repaints what the server pushes.
_SCRIPT = """
      const parts = {};
      let lastPhase = null;
      let lastTypeset = null;

      function post(path, body) {
        return fetch(path, {
          method: 'POST',
          headers: {'content-type': 'application/json'},
          body: JSON.stringify(body || {}),
        });
      }

      function replacePart(id, html) {
        if (parts[id] === html) return false;
        parts[id] = html;
        const el = document.getElementById(id);
        if (el) el.outerHTML = html;
        return true;
      }

      function paint(state) {
        const root = document.getElementById('presentation');
        if (state.phase !== lastPhase) {
          lastPhase = state.phase;
          for (const k of Object.keys(parts)) delete parts[k];
          if (state.phase === 'front-page') {
            root.innerHTML = state.html.frontPage;
          } else {
            root.innerHTML = state.html.header + state.html.timeline + state.html.slide;
            parts['header'] = state.html.header;
            parts['timeline'] = state.html.timeline;
            parts['slide'] = state.html.slide;
          }
        } else if (state.phase === 'presenting') {
          replacePart('slide', state.html.slide);
          replacePart('header', state.html.header);
          replacePart('timeline', state.html.timeline);
        }
        document.title = state.title;
        if (state.typesetSeq !== lastTypeset) {
          lastTypeset = state.typesetSeq;
          if (window.MathJax && MathJax.typesetPromise) MathJax.typesetPromise();
        }
      }

      document.addEventListener('keydown', (event) => {
        if ([32, 37, 39].includes(event.keyCode)) event.preventDefault();
        post('/api/presentation/key', {keyCode: event.keyCode});
      });

      document.addEventListener('click', (event) => {
        const target = event.target.closest('[data-request]');
        if (!target) return;
        post('/api/presentation/' + target.getAttribute('data-request'));
      });

      const source = new EventSource('/api/presentation/stream');
      source.onmessage = (event) => paint(JSON.parse(event.data));
"""


def render_page() -> str:
    service = STATE.service
    assert service is not None
    state = service.state_payload()
    if state["phase"] == "front-page":
        body = state["html"]["frontPage"]
    else:
        body = state["html"]["header"] + state["html"]["timeline"] + state["html"]["slide"]
    return f"""<!doctype html>
<html>
  <head>
    <meta charset="utf-8"/>
    <meta name="viewport" content="width=device-width, initial-scale=1"/>
    <title>{escape(service.document_title)}</title>
    <style>{_STYLE}    </style>
    <script async src="{escape(MATHJAX_URL, quote=True)}"></script>
  </head>
  <body>
    <div id="presentation">{body}</div>
    <script>{_SCRIPT}    </script>
  </body>
</html>
"""


@router.get("/")
def presentation_page():
    if STATE.service is None:
        return Response(
            content="No presentation loaded. Add presentations/default/presentation.json (or set PRESENTATION_DIR).",
            media_type="text/plain",
            status_code=503,
        )
    return Response(content=render_page(), media_type="text/html")
