LANDING_PAGE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Slack-to-Matrix Bridge</title>
    <style>
      body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; max-width: 800px; margin: 40px auto; padding: 0 20px; line-height: 1.6; }
      h1 { color: #333; border-bottom: 2px solid #4A154B; padding-bottom: 10px; }
      .status { background: #e7f5e9; color: #1a7f37; padding: 10px 15px; border-radius: 6px; display: inline-block; margin: 20px 0; }
      code, .result { background: #f6f8fa; padding: 2px 6px; border-radius: 4px; font-family: Menlo, Consolas, monospace; word-break: break-all; }
      .endpoint { background: #f6f8fa; padding: 15px; border-radius: 6px; margin: 20px 0; }
      input[type="url"] { width: 100%; padding: 10px; font-size: 1rem; box-sizing: border-box; }
      button { margin-top: 10px; padding: 10px 20px; font-size: 1rem; }
      .error { color: #991b1b; }
    </style>
  </head>
  <body>
    <h1>Slack-to-Matrix Bridge</h1>
    <div class="status">Status: Running</div>
    <p>A stateless webhook bridge that converts Slack messages to Matrix format.</p>
    <div class="endpoint">
      <p><strong>Webhook Endpoint:</strong></p>
      <p><code>POST /&lt;base64-encoded-matrix-url&gt;</code></p>
    </div>
    <p>The Matrix Hookshot URL must be Base64-encoded and placed in the path.</p>

    <h2>Generate a Bridge URL</h2>
    <label for="hookshotUrl">Matrix Hookshot URL</label>
    <input type="url" id="hookshotUrl" placeholder="https://hookshot.example.com/webhooks/v2/abcdef123456">
    <button id="generateBtn">Generate Bridge URL</button>
    <p id="error" class="error"></p>
    <p>Bridge URL: <span id="bridgeUrl" class="result"></span></p>

    <script>
      function encodeBase64Url(url) {
        const bytes = new TextEncoder().encode(url);
        let binary = '';
        bytes.forEach((b) => { binary += String.fromCharCode(b); });
        return btoa(binary).replace(/\\+/g, '-').replace(/\\//g, '_').replace(/=+$/, '');
      }

      document.getElementById('generateBtn').addEventListener('click', () => {
        const errorEl = document.getElementById('error');
        const value = document.getElementById('hookshotUrl').value.trim();
        errorEl.textContent = '';
        try {
          const parsed = new URL(value);
          if (parsed.protocol !== 'http:' && parsed.protocol !== 'https:') {
            throw new Error('unsupported protocol');
          }
          document.getElementById('bridgeUrl').textContent =
            window.location.origin + '/' + encodeBase64Url(value);
        } catch (e) {
          errorEl.textContent = 'Invalid URL format. Please enter a valid URL starting with http:// or https://';
        }
      });
    </script>
  </body>
</html>
"""
