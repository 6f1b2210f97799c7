"""
Dashboard Page Renderer - the single HTML page served at "/".

The page loads gridstack from a CDN for drag/resize and talks to this
service for everything else:

    GET  /auth/status      → which sign-in button to show
    GET  /layout           → items to seed the grid with
    PUT  /layout           → full item list after every grid change
    GET  /widgets          → panel HTML, once signed in
    POST /widgets/github/token → store a pasted GitHub token

Design Goals:
=============
1. No build step: one inline module script
2. The grid library stays the source of truth for positions in the browser
3. Panels are filled after the grid exists, so saved layouts keep working
"""

import html as html_escape
import json

from dashboard.schemas.layout import GRID_COLUMNS, WIDGET_PANELS


GRIDSTACK_VERSION = "8.0.1"
GRIDSTACK_JS = f"https://cdn.jsdelivr.net/npm/gridstack@{GRIDSTACK_VERSION}/dist/gridstack-h5.js"
GRIDSTACK_CSS = f"https://cdn.jsdelivr.net/npm/gridstack@{GRIDSTACK_VERSION}/dist/gridstack.min.css"


class DashboardPageRenderer:
    """
    Renders the dashboard page.

    Attributes:
        title: Text for <title> and the page header
    """

    def __init__(self, title: str = "Workspace Dashboard"):
        self.title = title

    def _get_css(self) -> str:
        return """
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            background: #f5f5f5;
            color: #1a1a1a;
        }
        header {
            display: flex;
            justify-content: space-between;
            align-items: center;
            padding: 0.75rem 1.5rem;
            background: #ffffff;
            border-bottom: 1px solid #e0e0e0;
        }
        header h1 { font-size: 1.25rem; margin: 0; }
        #user-email { color: #666666; margin-right: 1rem; }
        .grid-stack-item-content {
            background: #ffffff;
            border: 1px solid #e0e0e0;
            border-radius: 6px;
            padding: 0.5rem 0.75rem;
            overflow: auto;
        }
        .widget-header h3 { margin: 0 0 0.5rem 0; font-size: 1rem; }
        .widget-empty { color: #666666; }
        .widget-error { color: #ef5350; }
        """

    def _get_script(self) -> str:
        panels = json.dumps({name: element_id for name, (_, element_id) in WIDGET_PANELS.items()})
        return f"""
import {{GridStack}} from '{GRIDSTACK_JS}';

const PANELS = {panels};
let grid;

async function getJson(url, options) {{
  const res = await fetch(url, options);
  if (!res.ok) throw new Error(url + ' failed: ' + res.status);
  return res.json();
}}

async function showAuthState() {{
  const status = await getJson('/auth/status');
  const signedIn = status.state === 'present';
  document.getElementById('signInBtn').style.display = signedIn ? 'none' : 'inline-block';
  document.getElementById('signOutBtn').style.display = signedIn ? 'inline-block' : 'none';
  document.getElementById('user-email').textContent = status.email || '';
  return signedIn;
}}

function currentItems() {{
  return grid.engine.nodes.map(node => ({{
    x: node.x, y: node.y, w: node.w, h: node.h,
    content: node.el.querySelector('.grid-stack-item-content').innerHTML,
  }}));
}}

async function saveLayout() {{
  try {{
    await getJson('/layout', {{
      method: 'PUT',
      headers: {{'Content-Type': 'application/json'}},
      body: JSON.stringify({{layout: currentItems()}}),
    }});
  }} catch (err) {{
    console.error('layout save failed', err);
  }}
}}

async function initGrid() {{
  grid = GridStack.init({{column: {GRID_COLUMNS}, float: false, animate: true}}, '#grid');
  const data = await getJson('/layout');
  data.layout.forEach(item => {{
    const el = document.createElement('div');
    el.className = 'grid-stack-item';
    el.innerHTML = `<div class="grid-stack-item-content">${{item.content}}</div>`;
    grid.addWidget(el, {{x: item.x, y: item.y, w: item.w, h: item.h}});
  }});
  grid.on('change', () => saveLayout());
}}

function wireGitHubForm() {{
  const form = document.getElementById('gh-auth');
  if (!form) return;
  form.addEventListener('submit', async (event) => {{
    event.preventDefault();
    const token = new FormData(form).get('token');
    if (!token) return;
    await fetch('/widgets/github/token', {{
      method: 'POST',
      headers: {{'Content-Type': 'application/json'}},
      body: JSON.stringify({{token}}),
    }});
    await loadUserWidgets();
  }});
}}

async function loadUserWidgets() {{
  const panels = await getJson('/widgets');
  for (const [name, html] of Object.entries(panels)) {{
    const out = document.getElementById(PANELS[name]);
    if (out) out.innerHTML = html;
  }}
  wireGitHubForm();
}}

window.addEventListener('DOMContentLoaded', async () => {{
  document.getElementById('signInBtn').addEventListener('click', () => {{
    window.location.href = '/auth/google/login';
  }});
  document.getElementById('signOutBtn').addEventListener('click', async () => {{
    await fetch('/auth/google/signout', {{method: 'POST'}});
    window.location.reload();
  }});
  const signedIn = await showAuthState();
  await initGrid();
  if (signedIn) await loadUserWidgets();
}});
"""

    def render(self) -> str:
        """Complete HTML page as a string."""
        title = html_escape.escape(self.title)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <link rel="stylesheet" href="{GRIDSTACK_CSS}">
    <style>
    {self._get_css()}
    </style>
</head>
<body>
    <header>
        <h1>{title}</h1>
        <div>
            <span id="user-email"></span>
            <button id="signInBtn">Sign in with Google</button>
            <button id="signOutBtn" style="display:none">Sign out</button>
        </div>
    </header>
    <div id="grid" class="grid-stack"></div>
    <script type="module">
    {self._get_script()}
    </script>
</body>
</html>"""
