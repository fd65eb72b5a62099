"""
Traefik bootstrap config — the static ``traefik.toml``.

Dashboard on, docker provider limited to the shared network and to
containers that opt in with ``traefik.enable``, HTTP redirected to
HTTPS, and one wildcard certificate for the base domain.
"""

from __future__ import annotations

from devenv.core.services.generators.compose import NETWORK_NAME

CERTS_MOUNT = "/etc/certs"

_TEMPLATE = """\
[api]
  dashboard = true
  insecure = true

[log]
  level = "INFO"

[providers.docker]
  endpoint = "unix:///var/run/docker.sock"
  exposedByDefault = false
  network = "{network}"
  watch = true

[entryPoints.web]
  address = ":80"
  [entryPoints.web.http.redirections.entryPoint]
    to = "websecure"
    scheme = "https"
    permanent = true

[entryPoints.websecure]
  address = ":443"

[tls]
  [[tls.certificates]]
    certFile = "{certs}/{domain}.crt"
    keyFile = "{certs}/{domain}.key"

  [[tls.domains]]
    main = "*.{domain}"
    sans = ["{domain}"]
"""


def render_traefik_config(base_domain: str) -> str:
    return _TEMPLATE.format(network=NETWORK_NAME, certs=CERTS_MOUNT, domain=base_domain)
