"""
Copy-to-clipboard button for the BibTeX output.

The write has to happen inside the click handler: browsers only grant
clipboard access during a user gesture, so the button, its labels and the
status line are rendered as one HTML component and all of the copy logic
runs in the page.
"""

import json

from doi2bib import config

COPY_LABEL = "Copy"
COPIED_LABEL = "Copied!"
COPY_FAILED_LABEL = "Failed"

NOTHING_TO_COPY = "Nothing to copy"
COPY_SUCCEEDED = "BibTeX copied to clipboard"
COPY_FAILED = "Failed to copy to clipboard"

COPY_HELP = "Copy BibTeX to clipboard"
COPIED_HELP = "Copied to clipboard"

COMPONENT_HEIGHT = 72

_COLORS = {
    False: {"bg": "#e2e4e8", "hover": "#d1d4d9", "fg": "#1a1a2e", "border": "#c5c8cd", "muted": "#555"},
    True: {"bg": "#3b3c4a", "hover": "#4a4b5a", "fg": "#e8e8ed", "border": "#555", "muted": "#aaa"},
}


def js_string(value: str) -> str:
    """JSON-encode `value` as a JS string literal that is safe inside <script>."""
    return json.dumps(value).replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def copy_button_html(text: str, dark: bool = False) -> str:
    """HTML for a Copy button that writes `text` to the clipboard when clicked.

    Empty text reports "Nothing to copy". A successful write shows "Copied!"
    and reverts after COPY_REVERT_SECONDS; a second click restarts that
    timer. A rejected write shows "Failed" and stays until the next click.
    """
    c = _COLORS[bool(dark)]
    revert_ms = int(config.COPY_REVERT_SECONDS * 1000)
    return f"""
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{ background: transparent; font-family: 'Source Sans Pro', sans-serif; }}
        .copy-btn {{
            cursor: pointer;
            border-radius: 6px;
            padding: 6px 18px;
            font-size: 14px;
            background: {c['bg']};
            color: {c['fg']};
            border: 1px solid {c['border']};
            transition: background 0.2s;
        }}
        .copy-btn:hover {{ background: {c['hover']}; }}
        .copy-status {{ margin-top: 6px; font-size: 13px; color: {c['muted']}; min-height: 18px; }}
    </style>
    <button class="copy-btn" id="copy-btn" onclick="copyBibtex()"
            title="{COPY_HELP}" aria-label="{COPY_HELP}">{COPY_LABEL}</button>
    <div class="copy-status" id="copy-status" role="status"></div>
    <script>
        const bibtex = {js_string(text)};
        let revertTimer = null;

        function showLabel(label, help) {{
            const btn = document.getElementById('copy-btn');
            btn.textContent = label;
            btn.title = help;
            btn.setAttribute('aria-label', help);
        }}

        async function copyBibtex() {{
            const status = document.getElementById('copy-status');
            if (!bibtex) {{
                status.textContent = {js_string(NOTHING_TO_COPY)};
                return;
            }}
            try {{
                await navigator.clipboard.writeText(bibtex);
                showLabel({js_string(COPIED_LABEL)}, {js_string(COPIED_HELP)});
                status.textContent = {js_string(COPY_SUCCEEDED)};
                clearTimeout(revertTimer);
                revertTimer = setTimeout(() => showLabel({js_string(COPY_LABEL)}, {js_string(COPY_HELP)}), {revert_ms});
            }} catch (e) {{
                clearTimeout(revertTimer);
                showLabel({js_string(COPY_FAILED_LABEL)}, {js_string(COPY_HELP)});
                status.textContent = {js_string(COPY_FAILED)};
            }}
        }}
    </script>
    """
