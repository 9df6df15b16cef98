"""Email subjects and HTML bodies.

Bodies are Jinja2 templates under ``complyflow/templates``. Template data keeps
the camelCase keys callers send over the wire.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape

_environment = Environment(
    loader=PackageLoader("complyflow", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def format_uk_date(value: datetime) -> str:
    """Format a date the way en-GB short dates read (dd/mm/yyyy)."""
    return value.strftime("%d/%m/%Y")


TRANSACTIONAL_SUBJECTS: Dict[str, Callable[[Dict[str, Any], datetime], str]] = {
    "welcome": lambda data, now: (
        "Welcome to ComplyFlow – Your Compliance Journey Starts Now 🎉"
    ),
    "payment_success": lambda data, now: (
        f"🎉 Payment Confirmed – Welcome to ComplyFlow "
        f"{data.get('planName') or 'Professional'}!"
    ),
    "payment_failed": lambda data, now: "⚠️ Payment Failed – Action Required",
    "compliance_alert": lambda data, now: (
        f"⚠️ Compliance Alert: {data.get('title') or 'Action Required'}"
    ),
    "weekly_digest": lambda data, now: (
        f"📊 Your Weekly Compliance Summary – {now.day} {now:%b}"
    ),
    "trial_expiring": lambda data, now: (
        f"⏰ Your ComplyFlow trial expires in {data.get('daysLeft') or 3} days"
    ),
    "password_reset": lambda data, now: "Reset your ComplyFlow password",
    "team_invite": lambda data, now: (
        f"You've been invited to join "
        f"{data.get('organizationName') or 'a care home'} on ComplyFlow"
    ),
    "visa_expiry_alert": lambda data, now: (
        f"⚠️ Visa Expiry Alert: {data.get('workerName') or 'Staff Member'} "
        f"({data.get('daysRemaining')} days remaining)"
    ),
}

ONBOARDING_SUBJECTS: Dict[str, str] = {
    "welcome": "🎉 Welcome to ComplyFlow - Let's get you CQC-ready!",
    "day_3": "💡 3 ways to get the most from ComplyFlow this week",
    "day_7": "📈 Your first week with ComplyFlow - what's next?",
    "trial_ending": "⏰ Your ComplyFlow trial ends in 3 days",
}


def render_transactional(
    email_type: str,
    data: Dict[str, Any],
    base_url: str,
    now: Optional[datetime] = None,
) -> Tuple[str, str]:
    """Render a transactional email.

    Args:
        email_type: One of TRANSACTIONAL_SUBJECTS
        data: Template data
        base_url: Web app URL used for default links
        now: Render time (defaults to the current UTC time)

    Returns:
        (subject, html)

    Raises:
        KeyError: If the email type has no template
    """
    now = now or datetime.now(timezone.utc)
    subject = TRANSACTIONAL_SUBJECTS[email_type](data, now)
    html = _environment.get_template(f"email/{email_type}.html").render(
        data=data,
        base_url=base_url,
        today=format_uk_date(now),
        week_of=f"{now.day} {now:%B}",
        now_ms=int(now.timestamp() * 1000),
    )
    return subject, html


def render_onboarding(email_type: str, name: str, base_url: str) -> Tuple[str, str]:
    """Render one onboarding sequence email addressed to ``name``.

    Raises:
        KeyError: If the email type is not part of the sequence
    """
    subject = ONBOARDING_SUBJECTS[email_type]
    html = _environment.get_template(f"onboarding/{email_type}.html").render(
        name=name, base_url=base_url
    )
    return subject, html


def render_critical_visa_alert(
    worker_name: str, expiry_date: str, base_url: str
) -> Tuple[str, str]:
    """Owner notification raised when a visa enters the critical window."""
    subject = f"🚨 CRITICAL: Compliance Alert - {worker_name}"
    html = _environment.get_template("email/critical_visa_alert.html").render(
        worker_name=worker_name, expiry_date=expiry_date, base_url=base_url
    )
    return subject, html
