class GlobalMessages:
    # Auth Messages
    INVALID_CREDENTIALS = "Could not validate credentials."

    # Course Messages
    COURSES_RETRIEVED = "Courses retrieved successfully."
    COURSE_DETAILS_RETRIEVED = "Course details successfully retrieved."
    COURSE_NOT_FOUND = "Course not found."
    INVALID_COURSE_RECORD = "A course record in the catalog is malformed or incomplete."

    # University Messages
    UNIVERSITIES_RETRIEVED = "Universities retrieved successfully."
    UNIVERSITY_DETAILS_RETRIEVED = "University details successfully retrieved."
    UNIVERSITY_NOT_FOUND = "University not found."

    # Search Messages
    SEARCH_COMPLETED = "Search completed successfully."
    SEARCH_API_WORKING = "Simple search API is working!"

    # Saved Course Messages
    BOOKMARK_ADDED = "Course saved successfully."
    BOOKMARK_REMOVED = "Course removed from saved courses."
    BOOKMARK_STATUS_RETRIEVED = "Bookmark status retrieved successfully."
    BOOKMARK_NOT_FOUND = "Saved course not found."
    BOOKMARK_CONFLICT = "This course is already saved."
    NOTES_UPDATED = "Notes updated successfully."
    SAVED_COURSES_RETRIEVED = "Saved courses retrieved successfully."

    # Generic Messages
    INVALID_REQUEST = "The request payload is invalid."
    SERVICE_UNAVAILABLE = "The service is temporarily unavailable. Please try again shortly."
