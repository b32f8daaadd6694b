#!/usr/bin/env python3
"""Test Email Sender for SMTP Ingest Testing.

Builds a plain-text email carrying a verification code and prints it or
sends it to a running Anymail Codes SMTP listener.

Usage:
    # Print email to stdout
    python scripts/send_test_code_email.py --to user@test.com --code 73920

    # Send via SMTP, random code
    python scripts/send_test_code_email.py --to user@test.com \
        --send --smtp-host localhost --smtp-port 2525

    # Several recipients
    python scripts/send_test_code_email.py --to a@test.com --to b@test.com
"""

import argparse
import os
import secrets
import smtplib
import sys
from email.message import EmailMessage
from typing import List, Optional


def random_code(digits: int = 6) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(digits))


def create_email(
    from_email: str,
    to_emails: List[str],
    subject: str,
    code: str,
    body: Optional[str] = None,
) -> EmailMessage:
    """Create a plain-text verification email.

    Args:
        from_email: Sender email address
        to_emails: Recipient email addresses
        subject: Email subject
        code: Code to embed in the body
        body: Body template, ``{code}`` is substituted (optional)

    Returns:
        EmailMessage: Email message
    """
    msg = EmailMessage()
    msg['From'] = from_email
    msg['To'] = ", ".join(to_emails)
    msg['Subject'] = subject
    msg['Message-ID'] = f"<test-{os.urandom(8).hex()}@anymail-test>"

    if body is None:
        body = "Use {code} to verify your account.\n\nThe code expires soon."
    msg.set_content(body.format(code=code))
    return msg


def send_email(
    msg: EmailMessage,
    smtp_host: str = 'localhost',
    smtp_port: int = 2525,
):
    """Send email via SMTP.

    Args:
        msg: Email message to send
        smtp_host: SMTP server hostname
        smtp_port: SMTP server port
    """
    try:
        with smtplib.SMTP(smtp_host, smtp_port) as smtp:
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        print(f"ERROR sending email: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Email sent successfully to {msg['To']} via {smtp_host}:{smtp_port}",
        file=sys.stderr
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Send verification-code test emails to the Anymail Codes SMTP listener',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--from',
        dest='from_email',
        default='no-reply@example.com',
        help='Sender email address (default: no-reply@example.com)'
    )
    parser.add_argument(
        '--to',
        dest='to_emails',
        action='append',
        required=True,
        help='Recipient email address (can be specified multiple times)'
    )
    parser.add_argument(
        '--subject',
        default='Your verification code',
        help='Email subject (default: "Your verification code")'
    )
    parser.add_argument(
        '--code',
        help='Code to send (default: random 6 digits)'
    )
    parser.add_argument(
        '--body',
        help='Body template; {code} is replaced with the code'
    )
    parser.add_argument(
        '--send',
        action='store_true',
        help='Send email via SMTP (otherwise output to stdout)'
    )
    parser.add_argument(
        '--smtp-host',
        default='localhost',
        help='SMTP server hostname (default: localhost)'
    )
    parser.add_argument(
        '--smtp-port',
        type=int,
        default=2525,
        help='SMTP server port (default: 2525)'
    )

    args = parser.parse_args()

    code = args.code or random_code()
    msg = create_email(
        from_email=args.from_email,
        to_emails=args.to_emails,
        subject=args.subject,
        code=code,
        body=args.body,
    )

    if args.send:
        send_email(msg, smtp_host=args.smtp_host, smtp_port=args.smtp_port)
    else:
        print(msg.as_string())

    print(f"Code: {code}", file=sys.stderr)


if __name__ == '__main__':
    main()
