"""
Control Page
============

The HTML viewer served on every non-image path.

The page polls the image endpoint with a cache-busting query string at
a fixed interval and swaps each loaded frame into view, which gives a
live feed without multipart streaming.
"""

from string import Template


_PAGE_TEMPLATE = Template("""\
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>$title</title>
    <style>
        body {
            margin: 0;
            background: #1a1a1a;
            display: flex;
            justify-content: center;
            align-items: center;
            height: 100vh;
            font-family: 'Segoe UI', Arial, sans-serif;
            overflow: hidden;
        }
        #frame {
            max-width: 95vw;
            max-height: 95vh;
            border: 3px solid #4CAF50;
            border-radius: 8px;
            box-shadow: 0 0 20px rgba(76, 175, 80, 0.3);
        }
        .info {
            position: absolute;
            top: 20px;
            left: 20px;
            color: #4CAF50;
            background: rgba(0, 0, 0, 0.8);
            padding: 15px;
            border-radius: 8px;
            border: 1px solid #4CAF50;
        }
        .status { color: #81C784; margin-top: 5px; }
        .loading {
            position: absolute;
            top: 50%;
            left: 50%;
            transform: translate(-50%, -50%);
            color: #4CAF50;
            font-size: 18px;
        }
    </style>
</head>
<body>
    <div class="info">
        <h3 style="margin:0 0 10px 0;">$title</h3>
        <div class="status">Status: <span id="status">connecting...</span></div>
        <div class="status">Refresh: every ${refresh_ms} ms</div>
    </div>

    <div class="loading" id="loading">Waiting for first frame...</div>
    <img id="frame" src="$image_path" alt="live window capture" style="display:none;">

    <script>
        const img = document.getElementById('frame');
        const loading = document.getElementById('loading');
        const status = document.getElementById('status');
        let loaded = false;

        function updateImage() {
            const next = new Image();
            next.onload = function() {
                img.src = next.src;
                if (!loaded) {
                    loading.style.display = 'none';
                    img.style.display = 'block';
                    loaded = true;
                }
                status.textContent = 'live';
            };
            next.onerror = function() {
                status.textContent = loaded ? 'connection error' : 'no frame yet';
            };
            next.src = '$image_path?' + new Date().getTime();
        }

        updateImage();
        setInterval(updateImage, $refresh_ms);
    </script>
</body>
</html>
""")


def render_control_page(
    image_path: str = "/image",
    refresh_ms: int = 33,
    title: str = "WindowCast Live View",
) -> str:
    """
    Build the control page HTML.

    Args:
        image_path: Path prefix of the image endpoint
        refresh_ms: Client-side polling interval
        title: Page and header title

    Returns:
        Complete HTML document
    """
    return _PAGE_TEMPLATE.substitute(
        title=title,
        image_path=image_path,
        refresh_ms=refresh_ms,
    )
