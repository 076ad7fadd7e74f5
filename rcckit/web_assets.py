"""Static assets served by the mock radio's web interface."""

from __future__ import annotations

_TITLE = "Silvus Mock Web UI"

_STYLE_RULES: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    ("body", (("font-family", "Arial, sans-serif"), ("margin", "24px"))),
    (
        ".card",
        (
            ("border", "1px solid #ccc"),
            ("border-radius", "8px"),
            ("padding", "16px"),
            ("margin-bottom", "16px"),
            ("max-width", "680px"),
        ),
    ),
    (".card h2", (("margin-top", "0"),)),
    ("label", (("display", "block"), ("margin-bottom", "8px"))),
    (
        "input[type=text], input[type=number]",
        (("width", "100%"), ("padding", "8px"), ("box-sizing", "border-box")),
    ),
    (
        "button",
        (("padding", "10px 14px"), ("margin-right", "8px"), ("margin-top", "8px")),
    ),
    (
        "pre",
        (("background", "#f4f4f4"), ("padding", "12px"), ("overflow-x", "auto")),
    ),
)

# (label, element id, text after the value)
_STATUS_ROWS = (
    ("Frequency", "frequency", " MHz"),
    ("Power", "power", " dBm"),
    ("Availability", "available", ""),
    ("Blackout", "blackout", "s remaining"),
)

# (element id, caption, JSON-RPC method or None for a plain status refresh)
_ACTION_BUTTONS = (
    ("refresh-status", "Refresh Status", None),
    ("zeroize", "Zeroize", "zeroize"),
    ("radio-reset", "Radio Reset", "radio_reset"),
    ("factory-reset", "Factory Reset", "factory_reset"),
)

_SCRIPT_CORE = """
    const byId = (id) => document.getElementById(id);

    async function fetchStatus() {
      const reply = await fetch('/status');
      const status = await reply.json();
      byId('frequency').textContent = status.frequency;
      byId('power').textContent = status.power_dBm;
      byId('available').textContent = status.available ? 'yes' : 'no';
      byId('blackout').textContent = status.blackoutUntil > 0 ? status.blackoutUntil : '0';
      byId('profiles').textContent = JSON.stringify(status.supported_frequency_profiles, null, 2);
    }

    async function sendRpc(method, params = []) {
      const request = { jsonrpc: '2.0', method: method, params: params, id: method + '-' + Date.now() };
      const reply = await fetch('/streamscape_api', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify(request)
      });
      const answer = await reply.json();
      const log = byId('log');
      log.textContent = JSON.stringify(answer, null, 2) + '\\n\\n' + log.textContent;
      await fetchStatus();
    }

    byId('set-freq').addEventListener('click', async () => {
      await sendRpc('freq', [byId('freq-input').value.trim()]);
    });

    byId('set-power').addEventListener('click', async () => {
      await sendRpc('power_dBm', [byId('power-input').value.trim()]);
    });
"""

_SCRIPT_TAIL = """
    fetchStatus().catch(err => {
      byId('log').textContent = 'Failed to load status: ' + err;
    });
"""


def _render_style() -> str:
    rules = []
    for selector, declarations in _STYLE_RULES:
        body = " ".join(f"{name}: {value};" for name, value in declarations)
        rules.append(f"    {selector} {{ {body} }}")
    return "\n".join(rules)


def _render_status_card() -> str:
    rows = [
        f'    <p><strong>{label}:</strong> <span id="{element}">-</span>{suffix}</p>'
        for label, element, suffix in _STATUS_ROWS
    ]
    return "\n".join(
        [
            '  <div class="card">',
            "    <h2>Radio Status</h2>",
            *rows,
            "    <p><strong>Supported Profiles:</strong></p>",
            '    <pre id="profiles">Loading...</pre>',
            "  </div>",
        ]
    )


def _render_control_card() -> str:
    actions = [
        f'      <button id="{element}">{caption}</button>'
        for element, caption, _ in _ACTION_BUTTONS
    ]
    return "\n".join(
        [
            '  <div class="card">',
            "    <h2>Control</h2>",
            '    <label>Set Frequency (MHz): <input id="freq-input" type="text" value="4700.0"></label>',
            '    <button id="set-freq">Set Frequency</button>',
            '    <label>Set Power (dBm): <input id="power-input" type="number" min="0" max="39" value="30"></label>',
            '    <button id="set-power">Set Power</button>',
            '    <div style="margin-top: 12px;">',
            *actions,
            "    </div>",
            "  </div>",
        ]
    )


def _render_script() -> str:
    bindings = []
    for element, _, method in _ACTION_BUTTONS:
        handler = "fetchStatus" if method is None else f"() => sendRpc('{method}')"
        bindings.append(f"    byId('{element}').addEventListener('click', {handler});")
    return _SCRIPT_CORE + "\n" + "\n".join(bindings) + "\n" + _SCRIPT_TAIL


def _render_page() -> str:
    parts = [
        "",
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        f"  <title>{_TITLE}</title>",
        "  <style>",
        _render_style(),
        "  </style>",
        "</head>",
        "<body>",
        f"  <h1>{_TITLE}</h1>",
        _render_status_card(),
        "",
        _render_control_card(),
        "",
        '  <div class="card">',
        "    <h2>JSON-RPC Log</h2>",
        '    <pre id="log">Ready.</pre>',
        "  </div>",
        "",
        "  <script>" + _render_script() + "  </script>",
        "</body>",
        "</html>",
        "",
    ]
    return "\n".join(parts)


_INDEX_HTML = _render_page()


def get_web_index_html() -> str:
    """The single-page control UI served at ``/``."""
    return _INDEX_HTML