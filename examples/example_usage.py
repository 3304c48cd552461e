"""Example: use the service layer directly (no web framework).

Run with ``APP_ENV=testing`` to use an in-memory SQLite database.
"""

from staff_profiles.database.bootstrap import ensure_demo_profiles
from staff_profiles.main import create_container
from staff_profiles.profiles.model import ExternalUser


def main():
    container = create_container()
    ensure_demo_profiles(container.conn)
    service = container.profile_service

    admin = service.get_profile_by_email("admin@example.com")
    print("admin:", admin.full_name, admin.access_rights)
    print("junior to admin:", [p.email for p in service.list_subordinates(admin.profile_id)])
    print("name search:", [p.email for p in service.search_profiles(name_field="last_name", name="suz")])

    slack_payload = {"id": "U024BE7LH", "real_name": "Bob Tanaka", "profile": {"email": "bob@example.com"}}
    linked = service.link_slack_user(ExternalUser.from_slack(slack_payload))
    print("slack profile:", linked.profile_id, linked.full_name)

    service.send_password_reset_notification(admin, token="example-token")


if __name__ == "__main__":
    main()
