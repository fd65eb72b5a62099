"""
Per-project nginx server block and starter index page.

nginx serves static files from the project folder and hands ``.php``
requests to the project's php-fpm container over the shared network.
"""

from __future__ import annotations

from devenv.core.services.generators.compose import DOCUMENT_ROOT, runtime_service_name

FPM_PORT = 9000

_SERVER_BLOCK = """\
server {{
    listen 80;
    server_name localhost;
    root {root};
    index index.php index.html;

    location / {{
        try_files $uri $uri/ /index.php?$query_string;
    }}

    location ~ \\.php$ {{
        fastcgi_pass {upstream}:{port};
        fastcgi_index index.php;
        fastcgi_param SCRIPT_FILENAME $document_root$fastcgi_script_name;
        include fastcgi_params;
    }}
}}
"""

_INDEX_PHP = """\
<?php
echo '<h1>Project: {name}</h1>';
echo '<p>PHP version: ' . phpversion() . '</p>';
"""


def render_nginx_config(slug: str) -> str:
    return _SERVER_BLOCK.format(
        root=DOCUMENT_ROOT,
        upstream=runtime_service_name(slug),
        port=FPM_PORT,
    )


def render_index_php(project_name: str) -> str:
    # Single quotes delimit the PHP string
    safe = project_name.replace("\\", "\\\\").replace("'", "\\'")
    return _INDEX_PHP.format(name=safe)
