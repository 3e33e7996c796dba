"""End-to-end tests for the HTTP API.

Mocking strategy:
- Celery runs tasks eagerly (configured in conftest), so a submission has
  finished its whole pipeline by the time the POST returns.
- ``respx`` serves the target websites. The FastAPI ``TestClient`` uses its
  own transport and is not intercepted.
- ``DesignGenerator.generate`` / ``generate_image`` are patched so no model
  backend is called.
"""

from unittest.mock import patch

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from redesigner.main import app
from redesigner.services.generator import DesignGenerator
from redesigner.services.sanitizer import BRAND_MARKER

IMAGE_URL = "https://images.example.com/mockup.png"

_SITE_HTML = """\
<html>
<head>
  <title>Example Tech</title>
  <meta name="description" content="Modern software for teams">
</head>
<body>
  <header>
    <div class="logo"><img src="/logo.png" alt="Example"></div>
    <nav><a href="/about">About</a><a href="/pricing">Pricing</a></nav>
  </header>
  <h1>Build faster</h1>
  <p>Our software helps small teams ship reliable products every week.</p>
  <p>Contact sales@example.com or call 555-123-4567.</p>
</body>
</html>
"""

_ABOUT_HTML = "<html><head><title>About</title></head><body><h1>About us</h1></body></html>"


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def generator(clean_html):
    with patch.object(DesignGenerator, "generate", return_value=clean_html) as generate, patch.object(
        DesignGenerator, "generate_image", return_value=IMAGE_URL
    ) as generate_image:
        yield generate, generate_image


@pytest.fixture()
def site():
    with respx.mock(assert_all_called=False) as router:
        router.get(host="example.com", path="/").mock(return_value=httpx.Response(200, html=_SITE_HTML))
        router.get(host="example.com", path="/about").mock(return_value=httpx.Response(200, html=_ABOUT_HTML))
        router.get(host="example.com", path="/pricing").mock(return_value=httpx.Response(404))
        router.get(host="unreachable.example").mock(side_effect=httpx.ConnectError("Connection refused"))
        yield router


def _poll(client: TestClient, job_id: str, attempts: int = 20) -> dict:
    """Poll the status endpoint until the job is terminal."""
    body = {}
    for _ in range(attempts):
        response = client.get(f"/api/status/{job_id}")
        assert response.status_code == 200
        body = response.json()
        if body["status"] == "completed" or body["status"].startswith("error:"):
            return body
    return body


# ---------------------------------------------------------------------------
# Clone jobs
# ---------------------------------------------------------------------------

class TestCloneWebsite:
    def test_completes_with_one_demo_url(self, client, site, generator) -> None:
        response = client.post(
            "/api/clone-website",
            json={"website": "https://example.com", "theme": "clean-white", "businessType": "tech"},
        )

        assert response.status_code == 200
        job_id = response.json()["jobId"]

        status = _poll(client, job_id)
        assert status["status"] == "completed"
        assert status["statusDescription"] == "Your redesigned website is ready!"
        assert status["jobType"] == "clone"
        assert status["website"] == "https://example.com"
        assert len(status["demoUrls"]) == 1
        assert status["previewImageUrl"] == IMAGE_URL
        assert status["mockupUrl"] is None

        demo = client.get(status["demoUrls"][0])
        assert demo.status_code == 200
        assert demo.headers["content-type"].startswith("text/html")
        assert BRAND_MARKER in demo.text

    def test_prompt_uses_scraped_content(self, client, site, generator) -> None:
        generate, _ = generator

        client.post("/api/clone-website", json={"website": "https://example.com", "businessType": "tech"})

        prompt = generate.call_args.args[0]
        assert "Example Tech" in prompt
        assert "Build faster" in prompt
        assert "sales@example.com" in prompt

    def test_multi_page_job_lists_pages(self, client, site, generator) -> None:
        response = client.post(
            "/api/clone-website",
            json={"website": "https://example.com", "theme": "colorful", "businessType": "tech", "pageCount": 3},
        )
        job_id = response.json()["jobId"]

        status = _poll(client, job_id)
        pages = client.get(f"/api/jobs/{job_id}/pages").json()["pages"]

        # /pricing returns 404 and is skipped by the crawler
        assert status["status"] == "completed"
        assert len(status["demoUrls"]) == 2
        assert [page["sourceUrl"] for page in pages] == ["https://example.com", "https://example.com/about"]
        assert [page["demoUrl"] for page in pages] == status["demoUrls"]

    def test_bare_host_is_normalized(self, client, site, generator) -> None:
        job_id = client.post("/api/clone-website", json={"website": "example.com"}).json()["jobId"]

        assert _poll(client, job_id)["website"] == "https://example.com"

    def test_unreachable_site_ends_in_error(self, client, site, generator) -> None:
        response = client.post(
            "/api/clone-website",
            json={"website": "https://unreachable.example", "theme": "clean-white", "businessType": "tech"},
        )

        assert response.status_code == 200
        status = _poll(client, response.json()["jobId"])
        assert status["status"].startswith("error:")
        assert "Connection refused" in status["status"]
        assert status["statusDescription"] == "An error occurred during processing. Please try again."
        assert status["demoUrls"] is None
        assert status["mockupUrl"] is None

    def test_missing_website_is_rejected(self, client) -> None:
        response = client.post("/api/clone-website", json={"theme": "clean-white"})

        assert response.status_code == 400
        assert response.json() == {"error": "Website URL is required"}

    def test_invalid_website_is_rejected(self, client) -> None:
        response = client.post("/api/clone-website", json={"website": "not a url"})

        assert response.status_code == 400
        assert "error" in response.json()


# ---------------------------------------------------------------------------
# Mockup jobs
# ---------------------------------------------------------------------------

class TestCreateMockup:
    def test_completes_with_mockup_url(self, client, site, generator) -> None:
        response = client.post(
            "/api/create-mockup",
            json={"website": "https://example.com", "theme": "clean-white", "businessType": "tech"},
        )

        status = _poll(client, response.json()["jobId"])
        assert status["status"] == "completed"
        assert status["jobType"] == "mockup"
        assert status["mockupUrl"] == IMAGE_URL
        assert status["demoUrls"] is None
        assert status["statusDescription"] == "Your website mockup is ready!"
        assert status["previewImageUrl"] is None

    def test_missing_website_is_rejected(self, client) -> None:
        response = client.post("/api/create-mockup", json={})

        assert response.status_code == 400


# ---------------------------------------------------------------------------
# Status, demo, analysis, health
# ---------------------------------------------------------------------------

class TestStatus:
    def test_unknown_job_is_not_found(self, client) -> None:
        response = client.get("/api/status/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Job not found"}

    def test_unknown_job_pages_not_found(self, client) -> None:
        assert client.get("/api/jobs/does-not-exist/pages").status_code == 404


class TestDemo:
    def test_serves_primary_page_by_job_id(self, client, site, generator) -> None:
        job_id = client.post("/api/clone-website", json={"website": "https://example.com"}).json()["jobId"]

        response = client.get(f"/demo/{job_id}")

        assert response.status_code == 200
        assert BRAND_MARKER in response.text

    def test_unknown_artifact_is_not_found(self, client) -> None:
        response = client.get("/demo/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Demo not found"}

    def test_failed_job_has_no_demo(self, client, site, generator) -> None:
        job_id = client.post("/api/clone-website", json={"website": "https://unreachable.example"}).json()["jobId"]

        assert client.get(f"/demo/{job_id}").status_code == 404


class TestAnalyzeWebsite:
    def test_returns_summary_and_content(self, client, site) -> None:
        response = client.post("/api/analyze-website", json={"website": "example.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Example Tech"
        assert body["description"] == "Modern software for teams"
        assert body["logo"] == {"src": "https://example.com/logo.png", "alt": "Example"}
        assert body["navigation"] == ["About", "Pricing"]
        assert body["headings"] == ["Build faster"]
        assert body["contactInfo"] == ["sales@example.com", "555-123-4567"]
        assert body["estimatedBusinessType"] == "tech"
        assert body["suggestedThemes"] == ["clean-white", "dark-black", "colorful"]
        assert body["content"]["headings"][0] == {"level": "h1", "text": "Build faster", "cssClasses": ""}

    def test_unreachable_site_is_bad_gateway(self, client, site) -> None:
        response = client.post("/api/analyze-website", json={"website": "https://unreachable.example"})

        assert response.status_code == 502
        assert "Failed to fetch" in response.json()["error"]

    def test_missing_website_is_rejected(self, client) -> None:
        response = client.post("/api/analyze-website", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Website URL is required"}


class TestHealth:
    def test_health(self, client) -> None:
        assert client.get("/health").json() == {"status": "healthy"}
