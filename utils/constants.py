"""
utils/constants.py

Purpose: Centralized static content

- All user-facing messages
- Callback tokens and button labels
- Store sheet names

(Prevents hardcoding across the codebase)
"""

# ============================================================
# STORE LAYOUT
# ============================================================

USERS_SHEET = "Users"
SEATS_SHEET = "Seats"
TRACKING_SHEET = "Tracking"

STATUS_PENDING_DETAILS = "pending_details"
STATUS_ACTIVE = "active"

NOT_SET = "Not set"

# ============================================================
# CALLBACK TOKENS
# ============================================================

CB_REGISTER_ROLE_PREFIX = "cb_register_role_"
CB_BOOK_BUS = "cb_book_bus"
CB_MY_BOOKING = "cb_my_booking"
CB_MY_PROFILE = "cb_my_profile"
CB_HELP = "cb_help"
CB_STATUS = "cb_status"
CB_LANGUAGE_PREFIX = "lang_"

# ============================================================
# BUTTON LABELS
# ============================================================

BUTTON_ROLE_USER = "🧳 Passenger"
BUTTON_ROLE_MANAGER = "🧑‍💼 Manager"
BUTTON_ROLE_OWNER = "🚌 Bus Owner"

BUTTON_BOOK_BUS = "🚌 Book Bus"
BUTTON_MY_BOOKING = "🎫 My Booking"
BUTTON_MY_PROFILE = "👤 My Profile"
BUTTON_HELP = "🆘 Help"

SUPPORTED_LANGUAGES = {
    "en": "🇺🇸 English",
}

# ============================================================
# REGISTRATION & PROFILE
# ============================================================

ROLE_PROMPT_MESSAGE = """👋 *Welcome to GoRoute, {name}!*

Let's get you registered. How will you use GoRoute?"""

WELCOME_BACK_MESSAGE = '👋 Welcome back, {name}! Type "help" to see available commands.'

REGISTRATION_STARTED_MESSAGE = """✅ *Registered as {role}!*

One more step. Send your details in this format:

*my profile details <Full Name> / <Aadhar Number>*

Example: my profile details Asha Rao / 1234 5678 9012"""

INVALID_PROFILE_FORMAT_MESSAGE = """❌ *Invalid format*

Please send your details exactly like this:

*my profile details <Full Name> / <Aadhar Number>*

Example: my profile details Asha Rao / 1234 5678 9012"""

USER_NOT_FOUND_MESSAGE = "❌ You are not registered yet. Please type /start to register."

PROFILE_UPDATED_MESSAGE = "✅ *Profile updated!* Your account is now active."

PROFILE_TEMPLATE = """👤 *Your Profile*

🆔 User ID: {user_id}
📛 Name: {name}
📱 Phone: {phone}
🪪 Aadhar: {aadhar}
📌 Status: {status}
🎭 Role: {role}
🌐 Language: {language}
📅 Joined: {joined}"""

PROFILE_PENDING_REMINDER = """

⚠️ *Your profile is incomplete.*
Send: *my profile details <Full Name> / <Aadhar Number>*"""

LANGUAGE_MENU_MESSAGE = "🌐 *Choose your language*"

LANGUAGE_UPDATED_MESSAGE = "✅ Language set to {language}. More translations are coming soon!"

GREETING_MESSAGE = "👋 {name}!"

# ============================================================
# HELP & GENERAL
# ============================================================

HELP_MESSAGE = """🆘 *GoRoute Help Center*

*Booking Commands:*
• *Book bus* - Start bus search
• *Show seats BUS101* - View seat map
• *Book seat BUS101 3A* - Book specific seat
• *My booking* - View your tickets
• *Cancel booking BOOK123* - Cancel booking

*Information Commands:*
• *My profile* - Your account details
• *Live tracking BUS101* - Track bus location
• *Status* - System status
• */language* - Change language

💡 *Quick start:* Type "Book bus" to begin your journey!"""

FEATURE_WIP_MESSAGE = "🚧 This feature is coming soon!"

UNKNOWN_COMMAND_MESSAGE = '🤖 Sorry, I didn\'t understand that.\n\nTry:\n"book bus"\n"my booking"\n"help"'

# ============================================================
# BUSES & SEATS
# ============================================================

NO_BUSES_MESSAGE = "❌ *No buses available matching your criteria.*\n\nPlease check back later or try different routes."

SPECIFY_BUS_ID_MESSAGE = '❌ Please specify the Bus ID.\nExample: "Show seats BUS101"'

SEAT_MAP_ERROR_MESSAGE = "❌ Error generating seat map for {bus_id}."

NO_SEATS_FOUND_MESSAGE = "❌ No seat information found for {bus_id}."

SEAT_AVAILABLE = "🟩"
SEAT_OCCUPIED = "⚫"
SEAT_UNKNOWN = "⬜"

SEAT_ROWS = 10
SEAT_COLUMNS = ("A", "B", "C", "D")
AISLE_AFTER_COLUMN = "B"

TRACKING_UPDATE_MESSAGE = """📍 *Live update - {bus_id}*
{origin} → {destination}
🕒 Scheduled {date} {time}

Live GPS positions are coming soon."""

# ============================================================
# ERRORS
# ============================================================

STORE_CONFIG_ERROR_MESSAGE = "⚙️ The booking system is not configured correctly. Please contact support."

STORE_ACCESS_ERROR_MESSAGE = "🔒 The booking system cannot access its records right now. Please contact support."

GENERIC_RETRY_MESSAGE = "⚠️ Our booking system is temporarily unavailable. Please try again in a few minutes."

GENERIC_ERROR_MESSAGE = "❌ Oops! Something went wrong. Please try again."
