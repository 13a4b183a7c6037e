"""Rendering page — embeds the DOT source for client-side Viz.js rendering.

The source travels as a JSON string inside a ``<script type="application/json">``
element.  ``<``, ``>`` and ``&`` are written as ``\\uXXXX`` escapes so the text
can never close the element early, and ``json.dumps`` with ``ensure_ascii``
already escapes U+2028/U+2029.  ``JSON.parse`` in the browser gives back the
exact original string.

On every ``dotChanged`` event the page refetches ``/``, pulls the same element
out of the new document and re-renders.
"""

from __future__ import annotations

import html
import json
import re

SOURCE_ELEMENT_ID = "dot-source"

_SOURCE_RE = re.compile(
    rf'<script type="application/json" id="{SOURCE_ELEMENT_ID}">(.*?)</script>',
    re.DOTALL,
)

_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}

_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <script src="{asset_url}"></script>
</head>
<body>
    <div id="graph"></div>
    <script type="application/json" id="{source_id}">{source_json}</script>
    <script>
    (function() {{
      var vizReady = null;
      function readSource(doc) {{
        var el = doc.getElementById('{source_id}');
        return el ? JSON.parse(el.textContent) : null;
      }}
      function render(dot) {{
        var target = document.getElementById('graph');
        if (typeof Viz === 'undefined') {{
          target.innerText = 'Viz.js failed to load.';
          return;
        }}
        vizReady = vizReady || Viz.instance();
        vizReady.then(function(viz) {{
          try {{
            target.replaceChildren(viz.renderSVGElement(dot));
          }} catch (err) {{
            target.innerText = String(err);
          }}
        }});
      }}
      render(readSource(document));
      var src = new EventSource('{events_url}');
      src.addEventListener('{event_name}', function() {{
        fetch('/', {{cache: 'no-store'}})
          .then(function(r) {{ return r.text(); }})
          .then(function(text) {{
            var doc = new DOMParser().parseFromString(text, 'text/html');
            var dot = readSource(doc);
            if (dot === null) {{
              location.reload();
            }} else {{
              render(dot);
            }}
          }});
      }});
    }})();
    </script>
</body>
</html>
"""


def embed_source(text: str) -> str:
    """Encode *text* as a JSON string literal safe inside a ``<script>`` element."""
    encoded = json.dumps(text)
    for char, escape in _SCRIPT_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded


def extract_source(page: str) -> str | None:
    """Recover the embedded DOT source from a rendered page.

    Mirrors what the browser does after a refetch.  Returns None if the page
    carries no source element.

    """
    match = _SOURCE_RE.search(page)
    if match is None:
        return None
    return json.loads(match.group(1))


def render_page(
    text: str,
    *,
    title: str = "Graphviz DOT Viewer",
    asset_url: str = "/viz-global.js",
    events_url: str = "/dot-events",
    event_name: str = "dotChanged",
) -> str:
    """Render the full HTML page for the given DOT source."""
    return _PAGE.format(
        title=html.escape(title),
        asset_url=html.escape(asset_url),
        events_url=events_url,
        event_name=event_name,
        source_id=SOURCE_ELEMENT_ID,
        source_json=embed_source(text),
    )
