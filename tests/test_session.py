from accounts.session import Session, User
from storage import IS_LOGGED_IN_KEY, USER_KEY


def test_login_and_logout(store):
    session = Session(store)
    assert not session.is_logged_in()
    assert session.current_user() is None

    user = session.login("ravi@example.com", "Ravi Kumar", "9123456789")

    assert user == User("ravi@example.com", "Ravi Kumar", "9123456789")
    assert store.get(IS_LOGGED_IN_KEY) == "true"
    assert store.get(USER_KEY)["email"] == "ravi@example.com"
    assert Session(store).current_user() == user

    session.logout()
    assert not session.is_logged_in()
    assert session.current_user() is None
