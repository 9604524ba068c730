from werkzeug.security import generate_password_hash

DEMO_USERNAME = 'demo'

DEMO_CATEGORIES = ('Personal', 'Work', 'Ideas')

DEMO_CONTACTS = (
    {'name': 'Myself', 'phone_number': '', 'email': 'demo@example.com'},
    {'name': 'Mom', 'phone_number': '555-123-4567', 'email': 'mom@example.com'},
    {'name': 'Partner', 'phone_number': '555-987-6543', 'email': 'partner@example.com'},
)


def seed_demo_data(storage):
    """Create the demo user with its categories and contacts.

    Does nothing if the demo user already exists, so it is safe to run
    against a persistent database on every start. Returns the demo user.
    """
    user = storage.get_user_by_username(DEMO_USERNAME)
    if user is not None:
        return user

    user = storage.create_user(
        username=DEMO_USERNAME,
        password=generate_password_hash('password'),
        display_name='Demo User',
        email='demo@example.com',
    )
    for name in DEMO_CATEGORIES:
        storage.create_category(user.id, name)
    for contact in DEMO_CONTACTS:
        storage.create_contact(user.id, **contact)
    return user
