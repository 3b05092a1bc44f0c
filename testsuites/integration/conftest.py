import pytest

from webverify.framework.browser import Browser, BrowserOptions


LOGIN_PAGE = """
<html>
  <head><title>Login</title></head>
  <body>
    <form id="login" class="form card">
      <input id="username" class="field" value="demo">
      <input id="password" class="field secret" type="password">
      <button id="submit" class="btn primary" type="button">Submit Now</button>
    </form>
    <nav id="menu">
      <ul class="menu">
        <li class="item"><a class="link" href="#1">Submarine</a></li>
        <li class="item"><a class="link" href="#2">Submerge</a></li>
        <li class="item"><a class="link current" href="#3">Submission</a></li>
      </ul>
    </nav>
    <div class="notice">Saved</div>
  </body>
</html>
"""


@pytest.fixture
def live_browser(tmp_path, request):
    """Real Playwright session loaded with the login page; skipped when no browser can start."""
    browser_type = request.config.getoption("--wv-browser", default=None) or "chromium"
    options = BrowserOptions(browser_type=browser_type, screenshot_dir=str(tmp_path / "shots"))
    try:
        browser = Browser.launch(options)
    except Exception as e:
        pytest.skip(f"Browser unavailable: {e}")

    browser.driver.page.set_content(LOGIN_PAGE)
    yield browser
    browser.close()
