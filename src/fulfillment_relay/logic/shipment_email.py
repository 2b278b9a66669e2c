"""
Shipment notification email assembly.

The body is plain string templating over an inline-styled HTML layout that
renders in common mail clients; every interpolated value is HTML-escaped.
"""

from html import escape
from typing import Optional

from fulfillment_relay.models.fulfillment import ShipmentInfo, ShippedItem
from fulfillment_relay.models.marketing import EmailAddress, EmailMessage

TRACK_BUTTON_STYLE = (
    'display: inline-block; background: #4CAF50; color: white; padding: 12px 30px; '
    'text-decoration: none; border-radius: 5px; font-weight: bold; margin: 20px 0;'
)

EMAIL_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
    <h1 style="margin: 0; font-size: 28px;">&#128230; Your Order Has Shipped!</h1>
  </div>

  <div style="background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px;">
    <p style="font-size: 16px; margin-top: 0;">Hi {customer_name},</p>

    <p style="font-size: 16px;">Great news! Your order has been dispatched and is on its way to you.</p>

    <div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #4CAF50;">
      <h2 style="margin-top: 0; color: #333; font-size: 20px;">Shipment Details</h2>
      <table style="width: 100%; border-collapse: collapse;">
        <tr>
          <td style="padding: 8px 0; color: #666;">Order Number:</td>
          <td style="padding: 8px 0; font-weight: bold;">#{order_number}</td>
        </tr>
        <tr>
          <td style="padding: 8px 0; color: #666;">Tracking Number:</td>
          <td style="padding: 8px 0; font-weight: bold;">{tracking_number}</td>
        </tr>
        <tr>
          <td style="padding: 8px 0; color: #666;">Carrier:</td>
          <td style="padding: 8px 0;">{carrier}</td>
        </tr>
      </table>
    </div>

    <div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0;">
      <h3 style="margin-top: 0; color: #333; font-size: 18px;">Items in This Shipment</h3>
      <ul style="padding-left: 20px;">
{items}
      </ul>
    </div>

    <div style="text-align: center; margin: 30px 0;">
      {tracking_button}
    </div>

    <p style="font-size: 14px; color: #666; margin-top: 30px;">
      If you have any questions about your order, please don't hesitate to contact us.
    </p>

    <p style="font-size: 16px; margin-bottom: 0;">
      Thank you for shopping with us!<br>
      <strong>{from_name}</strong>
    </p>
  </div>

  <div style="text-align: center; padding: 20px; font-size: 12px; color: #999;">
    <p>This is an automated message. Please do not reply to this email.</p>
  </div>
</body>
</html>
"""


def _text(value: Optional[str]) -> str:
    return escape(value) if value else ''


def render_item(item: ShippedItem) -> str:
    variant = f'<span style="color: #666;"> - {escape(item.variant)}</span>' if item.variant else ''
    return (
        '        <li style="margin-bottom: 8px;">'
        f'<strong>{escape(item.name)}</strong>{variant}'
        f'<span style="color: #666;"> (Qty: {item.quantity})</span></li>'
    )


def render_tracking_button(tracking_url: Optional[str]) -> str:
    if not tracking_url:
        return ''
    return f'<a href="{escape(tracking_url, quote=True)}" style="{TRACK_BUTTON_STYLE}">Track Your Order</a>'


def render_carrier(info: ShipmentInfo) -> str:
    carrier = _text(info.carrier)
    if info.service:
        return f'{carrier} ({escape(info.service)})'.strip()
    return carrier


def render_shipment_html(info: ShipmentInfo, from_name: str) -> str:
    """Render the full HTML body of the shipment email."""
    return EMAIL_TEMPLATE.format(
        customer_name=_text(info.customer_name) or 'there',
        order_number=escape(info.order_number),
        tracking_number=_text(info.tracking_number),
        carrier=render_carrier(info),
        items='\n'.join(render_item(item) for item in info.items),
        tracking_button=render_tracking_button(info.tracking_url),
        from_name=escape(from_name),
    )


def shipment_subject(info: ShipmentInfo) -> str:
    return f'Your order #{info.order_number} has shipped! \U0001F4E6'


def build_shipment_email(info: ShipmentInfo, from_email: str, from_name: str) -> EmailMessage:
    """Assemble the Sender.net transactional email for a shipped order."""
    return EmailMessage(
        to=[EmailAddress(email=info.customer_email or '', name=info.customer_name)],
        sender=EmailAddress(email=from_email, name=from_name),
        subject=shipment_subject(info),
        html=render_shipment_html(info, from_name),
    )
