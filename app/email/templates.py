from html import escape

from app.models.domain import VerificationEmail

_DIGIT_CELL = (
    '<td style="width:40px;height:40px;border-radius:12px;border:1px solid #fecaca;'
    'background:#fef2f2;text-align:center;vertical-align:middle;">'
    '<span style="display:inline-block;font-size:20px;font-weight:600;line-height:40px;'
    'color:#b91c1c;">{digit}</span></td>'
)

_HTML = """\
<div style="background:#f3f4f6;padding:32px 16px;">
  <div style="max-width:480px;margin:0 auto;background:#ffffff;border-radius:18px;padding:24px 20px;border:1px solid #e5e7eb;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',system-ui,sans-serif;color:#111827;">
    <div style="font-size:13px;font-weight:600;">{brand}</div>
    <div style="font-size:11px;color:#6b7280;padding-bottom:16px;">Verification code</div>
    <h1 style="font-size:18px;line-height:1.4;font-weight:600;margin:0 0 8px 0;">Here is your {length}-digit code</h1>
    <p style="font-size:13px;line-height:1.6;margin:0 0 18px 0;color:#4b5563;">
      Enter this code in your browser to create your {brand} account and continue:
    </p>
    <table role="presentation" cellspacing="0" cellpadding="0" style="border-collapse:collapse;margin:0 auto 18px auto;">
      <tr>{digits}</tr>
    </table>
    <p style="font-size:12px;line-height:1.6;margin:0 0 8px 0;color:#6b7280;">
      This code expires in <span style="font-weight:600;color:#111827;">{expiry}</span> and can only be used once.
    </p>
    <p style="font-size:12px;line-height:1.5;margin:0;color:#9ca3af;">
      If you did not request this email, you can safely ignore it.
    </p>
  </div>
</div>
"""


def _format_expiry(ttl_seconds: float) -> str:
    if ttl_seconds >= 60 and ttl_seconds % 60 == 0:
        minutes = int(ttl_seconds // 60)
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    seconds = int(ttl_seconds)
    return f"{seconds} second" if seconds == 1 else f"{seconds} seconds"


def build_verification_email(code: str, ttl_seconds: float, brand: str) -> VerificationEmail:
    expiry = _format_expiry(ttl_seconds)
    subject = f"Your {brand} sign-in code: {code}"
    text = "\n".join([
        "Hi,",
        "",
        f"Your {brand} verification code is {code}.",
        "",
        "Enter this code in the browser to create your account and sign in.",
        "",
        f"For security, this code expires in {expiry}.",
        "",
        "If you did not request this code, you can safely ignore this email.",
    ])
    html = _HTML.format(
        brand=escape(brand),
        length=len(code),
        digits="".join(_DIGIT_CELL.format(digit=escape(d)) for d in code),
        expiry=expiry,
    )
    return VerificationEmail(subject=subject, text=text, html=html)
