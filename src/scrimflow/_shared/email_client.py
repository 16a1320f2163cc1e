# Area: Shared
"""
scrimflow._shared.email_client — Gmail API wrapper with OAuth
=============================================================

Handles all email I/O using Gmail API with OAuth2 authentication.
The runner calls poll() to get new command messages and send() to
deliver replies, status updates and match codes.

Setup:
    1. Create OAuth credentials at https://console.cloud.google.com/
    2. Download as client_secret.json
    3. Set GMAIL_CREDENTIALS_PATH and GMAIL_TOKEN_PATH in .env
       (use full paths including filename!)
    4. Run authenticate.py once; a browser opens for OAuth consent

send() may be called from the distribution worker thread while the
main loop is replying to commands, so all service calls go through
one lock.
"""

from __future__ import annotations
import base64
import json
import logging
import os
import threading
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email import encoders
from pathlib import Path
from typing import List, Optional, Dict, Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

logger = logging.getLogger("scrimflow.email")

# Gmail API scopes
GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/gmail.send",
]


class EmailClient:
    """Gmail API client with OAuth2 authentication."""

    def __init__(
        self,
        credentials_path: str = "",
        token_path: str = "",
        address: str = "",
    ):
        """Initialize Gmail client.

        Args:
            credentials_path: Full path to OAuth client_secret.json
            token_path: Full path to store/load token.json
            address: Gmail address (for logging, auto-detected from API)
        """
        self.credentials_path = credentials_path or os.environ.get(
            "GMAIL_CREDENTIALS_PATH", "client_secret.json"
        )
        self.token_path = token_path or os.environ.get(
            "GMAIL_TOKEN_PATH", "token.json"
        )
        self.address = address
        self._service = None
        self._credentials: Optional[Credentials] = None
        self._lock = threading.Lock()

    def connect(self) -> None:
        """Establish connection to Gmail API."""
        with self._lock:
            self._connect()

    def _connect(self) -> None:
        try:
            self._credentials = self._get_credentials()
            self._service = build("gmail", "v1", credentials=self._credentials)

            # Get the bot's own address
            profile = self._service.users().getProfile(userId="me").execute()
            self.address = profile.get("emailAddress", self.address)

            logger.info(f"Gmail API connected: {self.address}")
        except Exception as e:
            logger.error(f"Gmail connection failed: {e}")
            raise

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds_path = Path(self.credentials_path)
        token_path = Path(self.token_path)

        if not creds_path.exists():
            raise FileNotFoundError(
                f"Gmail credentials not found at {creds_path}. "
                "Download from Google Cloud Console."
            )

        creds = None

        if token_path.exists():
            try:
                creds = Credentials.from_authorized_user_file(
                    str(token_path), GMAIL_SCOPES
                )
            except ValueError as e:
                logger.warning(f"Ignoring unreadable token file {token_path}: {e}")

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(creds_path), GMAIL_SCOPES
                )
                creds = flow.run_local_server(port=0)

            token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    def disconnect(self) -> None:
        """Drop the service handle."""
        with self._lock:
            self._service = None
            self._credentials = None

    def poll(self) -> List[Dict[str, Any]]:
        """Poll inbox for new unread messages (oldest first)."""
        with self._lock:
            if not self._service:
                self._connect()

            messages = []
            try:
                # Gmail returns newest first
                results = self._service.users().messages().list(
                    userId="me", q="is:unread", maxResults=50
                ).execute()

                # Oldest first, so commands apply in the order they were sent
                msg_refs = list(reversed(results.get("messages", [])))

                for ref in msg_refs:
                    try:
                        msg = self._service.users().messages().get(
                            userId="me", id=ref["id"], format="full"
                        ).execute()

                        parsed = self._parse_message(msg)
                        if parsed:
                            messages.append(parsed)

                        self._service.users().messages().modify(
                            userId="me",
                            id=ref["id"],
                            body={"removeLabelIds": ["UNREAD"]},
                        ).execute()

                    except Exception as e:
                        logger.warning(f"Failed to process message {ref['id']}: {e}")

            except Exception as e:
                logger.error(f"Poll error: {e}")
                # Force a reconnect on the next poll
                self._service = None

            return messages

    def _parse_message(self, msg: dict) -> Optional[Dict[str, Any]]:
        """Parse Gmail API message into standard format."""
        headers = {h["name"]: h["value"] for h in msg["payload"].get("headers", [])}

        subject = headers.get("Subject", "")
        from_addr = headers.get("From", "")

        logger.info(f"Processing email: {subject} from {from_addr}")

        body = self._get_body(msg["payload"])

        body_json = None
        if body:
            try:
                body_json = json.loads(body.strip())
            except (json.JSONDecodeError, ValueError):
                pass

        if not body_json:
            body_json = self._get_json_from_attachments(msg, msg.get("id", ""))

        if body_json:
            logger.debug(f"Parsed JSON with message_type: {body_json.get('message_type', 'N/A')}")

        return {
            "uid": msg["id"],
            "subject": subject,
            "from": from_addr,
            "body_json": body_json,
            "raw_body": body,
        }

    def _get_json_from_attachments(
        self, msg: dict, message_id: str
    ) -> Optional[Dict[str, Any]]:
        """Extract JSON from email attachments."""
        payload = msg.get("payload", {})

        for part in payload.get("parts", []):
            filename = part.get("filename", "")
            mime_type = part.get("mimeType", "")

            # Nested multipart
            if part.get("parts"):
                nested_result = self._get_json_from_attachments(
                    {"payload": part}, message_id
                )
                if nested_result is not None:
                    return nested_result

            if filename.endswith(".json") or mime_type == "application/json":
                body_data = part.get("body", {})
                attachment_id = body_data.get("attachmentId")

                if attachment_id:
                    try:
                        att = self._service.users().messages().attachments().get(
                            userId="me",
                            messageId=message_id,
                            id=attachment_id,
                        ).execute()
                        data = att.get("data", "")
                        if data:
                            content = base64.urlsafe_b64decode(data).decode("utf-8")
                            return json.loads(content)
                    except Exception as e:
                        logger.warning(f"Failed to get attachment {filename}: {e}")
                elif body_data.get("data"):
                    try:
                        content = base64.urlsafe_b64decode(body_data["data"]).decode("utf-8")
                        return json.loads(content)
                    except (ValueError, UnicodeDecodeError) as e:
                        logger.warning(f"Failed to parse inline attachment: {e}")

        return None

    def _get_body(self, payload: dict) -> str:
        """Extract text body from message payload."""
        if payload.get("body", {}).get("data"):
            return base64.urlsafe_b64decode(payload["body"]["data"]).decode("utf-8")

        for part in payload.get("parts", []):
            if part.get("mimeType") == "text/plain":
                data = part.get("body", {}).get("data", "")
                if data:
                    return base64.urlsafe_b64decode(data).decode("utf-8")
            elif part.get("parts"):
                result = self._get_body(part)
                if result:
                    return result
        return ""

    def send(
        self,
        to_email: str,
        subject: str,
        body_dict: dict,
        attachment_filename: str = "payload.json",
    ) -> bool:
        """Send a protocol message as email with JSON attachment.

        The body carries the payload's human-readable ``message`` (if any);
        the full envelope travels as payload.json.
        """
        with self._lock:
            try:
                if not self._service:
                    self._connect()

                msg = MIMEMultipart()
                msg["To"] = to_email
                msg["Subject"] = subject

                text = (body_dict.get("payload") or {}).get("message", "")
                msg.attach(MIMEText(str(text), "plain", "utf-8"))

                json_content = json.dumps(body_dict, indent=2)
                attachment = MIMEBase("application", "json")
                attachment.set_payload(json_content.encode("utf-8"))
                encoders.encode_base64(attachment)
                attachment.add_header(
                    "Content-Disposition",
                    f"attachment; filename={attachment_filename}",
                )
                msg.attach(attachment)

                raw = base64.urlsafe_b64encode(msg.as_bytes()).decode()
                self._service.users().messages().send(
                    userId="me", body={"raw": raw}
                ).execute()

                short_subj = subject.split("::")[-1] if "::" in subject else subject
                logger.debug(f"Sent [{short_subj}] → {to_email}")
                return True

            except Exception as e:
                logger.error(f"Send failed to {to_email}: {e}")
                return False
