"""Nginx reverse-proxy site generation."""

SITES_AVAILABLE = "/etc/nginx/sites-available"
SITES_ENABLED = "/etc/nginx/sites-enabled"


def site_paths(site_name):
    """(sites-available path, sites-enabled path) for a site."""
    return f"{SITES_AVAILABLE}/{site_name}", f"{SITES_ENABLED}/{site_name}"


def generate_site_conf(site_name, app_port):
    """Generate an nginx server block proxying port 80 to localhost:app_port."""
    return f"""# Managed by hostdeploy: {site_name}
server {{
    listen 80;
    server_name _;

    location / {{
        proxy_pass http://localhost:{app_port};
        proxy_http_version 1.1;
        proxy_set_header Host $host;
        proxy_set_header X-Real-IP $remote_addr;
        proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
        proxy_set_header X-Forwarded-Proto $scheme;
    }}
}}
"""


def enable_site_cmd(site_name):
    """Shell command that enables the site and reloads nginx after a config test."""
    available, _ = site_paths(site_name)
    return (
        f"sudo ln -sf {available} {SITES_ENABLED}/"
        f" && sudo rm -f {SITES_ENABLED}/default"
        " && sudo nginx -t && sudo systemctl reload nginx"
    )


def remove_site_cmd(site_name):
    """Shell command that removes the site and reloads nginx."""
    available, enabled = site_paths(site_name)
    return f"sudo rm -f {enabled} {available} && sudo nginx -t && sudo systemctl reload nginx"
