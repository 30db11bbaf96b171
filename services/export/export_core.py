"""
Export Core Module
==================

Builds the HTML host document loaded by the headless browser. The page
embeds the diagram source, loads mermaid.js and reports completion or
failure through ``window.renderingComplete`` / ``window.renderError``.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import html
import json

DIAGRAM_SELECTOR = '.mermaid svg'

# Resolves once mermaid has finished, successfully or not
RENDER_SETTLED_CHECK = (
    "() => window.renderingComplete === true || window.renderError !== null"
)


def build_host_html(content: str, script_url: str, theme: str = 'default') -> str:
    """
    Return the HTML page that renders ``content`` with mermaid.

    The source is HTML-escaped inside ``<pre class="mermaid">``; mermaid
    reads the element's text, so the diagram is rendered verbatim.
    """
    escaped_content = html.escape(content)
    init_options = json.dumps({
        'startOnLoad': False,
        'theme': theme,
        'securityLevel': 'strict',
    })
    return f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body {{ margin: 0; padding: 20px; background: white; }}
        .mermaid {{ display: flex; justify-content: center; margin: 0; }}
    </style>
    <script>
        window.renderingComplete = false;
        window.renderError = null;
        window.addEventListener('error', function (event) {{
            window.renderError = event.message || 'Script error';
        }});
    </script>
    <script src="{html.escape(script_url, quote=True)}"></script>
</head>
<body>
    <pre class="mermaid">{escaped_content}</pre>
    <script>
        if (typeof mermaid === 'undefined') {{
            window.renderError = window.renderError || 'Mermaid renderer failed to load';
        }} else {{
            mermaid.initialize({init_options});
            mermaid.run({{ querySelector: '.mermaid' }})
                .then(function () {{ window.renderingComplete = true; }})
                .catch(function (err) {{
                    window.renderError = String((err && err.message) || err);
                }});
        }}
    </script>
</body>
</html>'''
