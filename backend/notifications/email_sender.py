"""
Email sending via Resend API for alert matches.

Alert owners who opted into email notifications get one email per matching
delivery, in addition to the in-app notification.
"""

import html
import os
from typing import Any, Dict

import resend
from dotenv import load_dotenv

load_dotenv()

# Initialize Resend with API key from environment
resend.api_key = os.getenv('RESEND_API_KEY')

# Frontend base URL for links in emails
FRONTEND_BASE_URL = os.getenv('FRONTEND_BASE_URL', 'http://localhost:3000')


def delivery_url(delivery_id: str) -> str:
    return f"{FRONTEND_BASE_URL}/deliveries/{delivery_id}"


def send_alert_match_email(
    user_email: str,
    title: str,
    message: str,
    delivery_id: str,
    alert_name: str | None = None,
) -> Dict[str, Any]:
    """
    Send an alert match email.

    Args:
        user_email: Recipient email address
        title: Localized notification title (used as subject)
        message: Route line ("Paris, France → Dakar, Senegal")
        delivery_id: Matching delivery, linked from the email
        alert_name: Name of the alert that matched, if any

    Returns:
        Dictionary with 'success' (bool), 'email_id' (str if success), 'error' (str if failed)
    """
    if not user_email:
        return {'success': False, 'error': 'No recipient email'}

    from_email = os.getenv('NOTIFICATION_FROM_EMAIL', 'alerts@bagami.app')
    url = delivery_url(delivery_id)

    try:
        response = resend.Emails.send({
            "from": f"Bagami Alerts <{from_email}>",
            "to": user_email,
            "subject": title,
            "html": _build_alert_html(title, message, url, alert_name),
            "text": _build_alert_text(title, message, url, alert_name),
        })

        return {
            'success': True,
            'email_id': response.get('id')
        }

    except Exception as e:
        return {
            'success': False,
            'error': str(e)
        }


def _build_alert_html(title: str, message: str, url: str, alert_name: str | None) -> str:
    alert_line = ""
    if alert_name:
        alert_line = f'<p class="alert-name">Matched your alert: <strong>{html.escape(alert_name)}</strong></p>'

    return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{html.escape(title)}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;
            color: #333;
            max-width: 600px;
            margin: 0 auto;
            padding: 20px;
        }}
        .route {{
            font-size: 18px;
            font-weight: 600;
            margin: 15px 0;
        }}
        .alert-name {{
            color: #6b7280;
            font-size: 13px;
        }}
        a.view {{
            color: #2563eb;
            text-decoration: none;
            font-weight: 500;
        }}
    </style>
</head>
<body>
    <h1>{html.escape(title)}</h1>
    <p class="route">{html.escape(message)}</p>
    {alert_line}
    <a href="{url}" class="view">View delivery →</a>
</body>
</html>
"""


def _build_alert_text(title: str, message: str, url: str, alert_name: str | None) -> str:
    text = f"{title}\n\n{message}\n"
    if alert_name:
        text += f"Matched your alert: {alert_name}\n"
    text += f"\nView delivery: {url}\n"
    return text
