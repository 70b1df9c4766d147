"""Declarative table of the ConstructionWire API operations.

Each entry fixes a verb, a path template relative to the API base URL and
where every documented parameter goes. Client methods and MCP tools are both
generated from this table.
"""

from typing import Dict, Tuple

from .models import APIEndpoint, APIParameter, HTTPMethod, ParamLocation

GET = HTTPMethod.GET
POST = HTTPMethod.POST
PATCH = HTTPMethod.PATCH
DELETE = HTTPMethod.DELETE


def path(name: str, description: str = "", type: str = "integer") -> APIParameter:
    return APIParameter(name, type, ParamLocation.PATH, description, required=True)


def query(name: str, type: str = "string", description: str = "", *, array: bool = False,
          required: bool = False) -> APIParameter:
    return APIParameter(name, type, ParamLocation.QUERY, description, required=required, is_array=array)


def body(name: str, type: str = "string", description: str = "", *, array: bool = False,
         required: bool = False) -> APIParameter:
    return APIParameter(name, type, ParamLocation.BODY, description, required=required, is_array=array)


PAGINATION = (
    query("PageNumber", "integer", "Page number, starting at 1"),
    query("PageSize", "integer", "Number of results per page"),
)

DATE_RANGE = (
    query("PublishedUpdatedDateMin", description="Earliest published/updated date (YYYY-MM-DD)"),
    query("PublishedUpdatedDateMax", description="Latest published/updated date (YYYY-MM-DD)"),
    query("PublishedUpdatedDateByDayCount", "integer", "Published/updated within this many days"),
    query("UpdatedDateMin", description="Earliest updated date (YYYY-MM-DD)"),
    query("UpdatedDateMax", description="Latest updated date (YYYY-MM-DD)"),
)

SORTING = (
    query("Keyword", description="Free-text keyword search"),
    query("SortBy", description="Field to sort by"),
    query("SortDirection", description="ASC or DESC"),
)

LOCATION_FILTERS = (
    query("City"),
    query("State", description="State abbreviations", array=True),
    query("PostalCode"),
    query("County", array=True),
)

REPORT_FILTERS = (
    query("ReportId", "integer", "Project report ids", array=True),
    query("ReportType", "integer", "Report type ids", array=True),
    *LOCATION_FILTERS,
    query("Region", array=True),
    query("Country", array=True),
    query("ProjectStage", "integer", "Project stage ids", array=True),
    query("ProjectType", "integer", "Project type ids", array=True),
    query("BuildingUse", "integer", "Building use ids", array=True),
)

COMPANY_FILTERS = (
    query("CompanyId", "integer", "Company ids", array=True),
    query("CompanyName"),
    *LOCATION_FILTERS,
)

PEOPLE_FILTERS = (
    query("NameId", "integer", "Person ids", array=True),
    query("FirstName"),
    query("LastName"),
    query("CompanyName"),
    query("City"),
    query("State", description="State abbreviations", array=True),
)

REPORT_ID = path("reportId", "Project report id")
COMPANY_ID = path("companyId", "Company id")
NAME_ID = path("nameId", "Person id")
FOLDER_ID = path("folderId", "Folder id")
NOTE_ID = path("noteId", "Note id")
TASK_ID = path("taskId", "Task id")
SEARCH_ID = path("searchId", "Saved search id")
QUESTION_ID = path("questionId", "Question id")

FOLLOW_BODY = (body("ItemId", "integer", "Id of the item to follow", required=True),)
UNFOLLOW_QUERY = (query("ItemId", "integer", "Id of the item to unfollow", required=True),)


def _endpoints() -> Tuple[APIEndpoint, ...]:
    return (
        # Authentication
        APIEndpoint("auth_login", "/auth", POST, "Log in and obtain an access token", (
            body("username", required=True),
            body("password", required=True),
        )),
        APIEndpoint("auth_logout", "/auth/logout", POST, "Log out and invalidate the current access token"),
        APIEndpoint("auth_details", "/auth/details", GET,
                    "Get details about the authenticated user and subscription"),

        # Common lookup lists
        APIEndpoint("common_lists_list", "/2.0/common/lists", GET, "List the available lookup lists"),
        APIEndpoint("common_lists_get", "/2.0/common/lists/{listId}", GET,
                    "Get the values of a lookup list (project types, stages, building uses...)", (
                        path("listId", "Lookup list id", "string"),
                    )),
        APIEndpoint("common_states_list", "/2.0/common/states", GET, "List states and provinces"),
        APIEndpoint("common_counties_list", "/2.0/common/states/{stateAbbr}/counties", GET,
                    "List the counties of a state", (
                        path("stateAbbr", "Two-letter state abbreviation", "string"),
                    )),
        APIEndpoint("common_regions_list", "/2.0/common/regions", GET, "List geographic regions"),

        # Project reports
        APIEndpoint("reports_list", "/2.0/reports", GET, "Search construction project reports",
                    (*PAGINATION, *DATE_RANGE, *REPORT_FILTERS, *SORTING)),
        APIEndpoint("reports_get", "/2.0/reports/{reportId}", GET, "Get a single project report", (REPORT_ID,)),
        APIEndpoint("reports_all", "/2.0/reports/all", GET,
                    "List every project report available to the subscription",
                    (*PAGINATION, *DATE_RANGE)),
        APIEndpoint("reports_facets", "/2.0/reports/facets", GET,
                    "Get facet counts for a project report search", (*DATE_RANGE, *REPORT_FILTERS, SORTING[0])),
        APIEndpoint("reports_files_list", "/2.0/reports/{reportId}/files", GET,
                    "List the files (plans, specs) attached to a project report", (REPORT_ID, *PAGINATION)),
        APIEndpoint("reports_files_get", "/2.0/reports/{reportId}/files/{fileId}", GET,
                    "Get a file attached to a project report", (REPORT_ID, path("fileId", "File id"))),
        APIEndpoint("reports_notes_list", "/2.0/reports/{reportId}/notes", GET,
                    "List notes on a project report", (REPORT_ID, *PAGINATION)),
        APIEndpoint("reports_notes_get", "/2.0/reports/{reportId}/notes/{noteId}", GET,
                    "Get a note on a project report", (REPORT_ID, NOTE_ID)),
        APIEndpoint("reports_add_note", "/2.0/reports/{reportId}/notes", POST,
                    "Add a note to a project report", (
                        REPORT_ID,
                        body("Title", required=True),
                        body("Body"),
                    )),
        APIEndpoint("reports_questions_list", "/2.0/reports/{reportId}/questions", GET,
                    "List questions asked about a project report", (REPORT_ID, *PAGINATION)),
        APIEndpoint("reports_questions_get", "/2.0/reports/{reportId}/questions/{questionId}", GET,
                    "Get a question asked about a project report", (REPORT_ID, QUESTION_ID)),
        APIEndpoint("reports_add_question", "/2.0/reports/{reportId}/questions", POST,
                    "Ask the research team a question about a project report", (
                        REPORT_ID,
                        body("Question", required=True),
                    )),
        APIEndpoint("reports_answers_list", "/2.0/reports/{reportId}/questions/{questionId}/answers", GET,
                    "List answers to a project report question", (REPORT_ID, QUESTION_ID)),
        APIEndpoint("reports_answers_get",
                    "/2.0/reports/{reportId}/questions/{questionId}/answers/{answerId}", GET,
                    "Get an answer to a project report question",
                    (REPORT_ID, QUESTION_ID, path("answerId", "Answer id"))),
        APIEndpoint("reports_tasks_list", "/2.0/reports/{reportId}/tasks", GET,
                    "List tasks linked to a project report", (REPORT_ID, *PAGINATION)),
        APIEndpoint("reports_tasks_get", "/2.0/reports/{reportId}/tasks/{taskId}", GET,
                    "Get a task linked to a project report", (REPORT_ID, TASK_ID)),
        APIEndpoint("reports_add_task", "/2.0/reports/{reportId}/tasks", POST,
                    "Create a task linked to a project report", (
                        REPORT_ID,
                        body("Title", required=True),
                        body("Description"),
                        body("DueDate", description="Due date (YYYY-MM-DD)"),
                    )),
        APIEndpoint("reports_companies_list", "/2.0/reports/{reportId}/companies", GET,
                    "List companies involved in a project report", (REPORT_ID, *PAGINATION)),
        APIEndpoint("reports_people_list", "/2.0/reports/{reportId}/people", GET,
                    "List people involved in a project report", (REPORT_ID, *PAGINATION)),
        APIEndpoint("reports_followings_list", "/2.0/reports/followings", GET,
                    "List the project reports you follow", PAGINATION),
        APIEndpoint("reports_follow", "/2.0/reports/followings", POST, "Follow a project report", FOLLOW_BODY),
        APIEndpoint("reports_unfollow", "/2.0/reports/followings", DELETE,
                    "Stop following a project report", UNFOLLOW_QUERY),

        # Companies
        APIEndpoint("companies_list", "/2.0/companies", GET, "Search companies",
                    (*PAGINATION, *COMPANY_FILTERS, *SORTING)),
        APIEndpoint("companies_get", "/2.0/companies/{companyId}", GET, "Get a single company", (COMPANY_ID,)),
        APIEndpoint("companies_facets", "/2.0/companies/facets", GET,
                    "Get facet counts for a company search", (*COMPANY_FILTERS, SORTING[0])),
        APIEndpoint("companies_locations_list", "/2.0/companies/{companyId}/locations", GET,
                    "List the office locations of a company", (COMPANY_ID, *PAGINATION)),
        APIEndpoint("companies_locations_get", "/2.0/companies/{companyId}/locations/{locationId}", GET,
                    "Get one office location of a company", (COMPANY_ID, path("locationId", "Location id"))),
        APIEndpoint("companies_people_list", "/2.0/companies/{companyId}/people", GET,
                    "List people who work for a company", (COMPANY_ID, *PAGINATION)),
        APIEndpoint("companies_reports_list", "/2.0/companies/{companyId}/reports", GET,
                    "List project reports a company is involved in", (COMPANY_ID, *PAGINATION, *DATE_RANGE)),
        APIEndpoint("companies_relationships_list", "/2.0/companies/{companyId}/relationships", GET,
                    "List companies that have worked with a company", (COMPANY_ID, *PAGINATION)),
        APIEndpoint("companies_notes_list", "/2.0/companies/{companyId}/notes", GET,
                    "List notes on a company", (COMPANY_ID, *PAGINATION)),
        APIEndpoint("companies_followings_list", "/2.0/companies/followings", GET,
                    "List the companies you follow", PAGINATION),
        APIEndpoint("companies_follow", "/2.0/companies/followings", POST, "Follow a company", FOLLOW_BODY),
        APIEndpoint("companies_unfollow", "/2.0/companies/followings", DELETE,
                    "Stop following a company", UNFOLLOW_QUERY),

        # People
        APIEndpoint("people_list", "/2.0/people", GET, "Search people",
                    (*PAGINATION, *PEOPLE_FILTERS, *SORTING)),
        APIEndpoint("people_get", "/2.0/people/{nameId}", GET, "Get a single person", (NAME_ID,)),
        APIEndpoint("people_facets", "/2.0/people/facets", GET,
                    "Get facet counts for a people search", (*PEOPLE_FILTERS, SORTING[0])),
        APIEndpoint("people_reports_list", "/2.0/people/{nameId}/reports", GET,
                    "List project reports a person is involved in", (NAME_ID, *PAGINATION, *DATE_RANGE)),
        APIEndpoint("people_relationships_list", "/2.0/people/{nameId}/relationships", GET,
                    "List people who have worked with a person", (NAME_ID, *PAGINATION)),
        APIEndpoint("people_notes_list", "/2.0/people/{nameId}/notes", GET,
                    "List notes on a person", (NAME_ID, *PAGINATION)),
        APIEndpoint("people_followings_list", "/2.0/people/followings", GET,
                    "List the people you follow", PAGINATION),
        APIEndpoint("people_follow", "/2.0/people/followings", POST, "Follow a person", FOLLOW_BODY),
        APIEndpoint("people_unfollow", "/2.0/people/followings", DELETE,
                    "Stop following a person", UNFOLLOW_QUERY),

        # Folders
        APIEndpoint("folders_list", "/2.0/folders", GET, "List your folders", PAGINATION),
        APIEndpoint("folders_get", "/2.0/folders/{folderId}", GET, "Get a folder", (FOLDER_ID,)),
        APIEndpoint("folders_create", "/2.0/folders", POST, "Create a folder", (
            body("Name", required=True),
            body("Description"),
        )),
        APIEndpoint("folders_update", "/2.0/folders/{folderId}", PATCH, "Rename or describe a folder", (
            FOLDER_ID,
            body("Name"),
            body("Description"),
        )),
        APIEndpoint("folders_delete", "/2.0/folders/{folderId}", DELETE, "Delete a folder", (FOLDER_ID,)),
        APIEndpoint("folders_items_list", "/2.0/folders/{folderId}/items", GET,
                    "List the items saved in a folder", (FOLDER_ID, *PAGINATION)),
        APIEndpoint("folders_add_item", "/2.0/folders/{folderId}/items", POST, "Save an item to a folder", (
            FOLDER_ID,
            body("ItemType", description="Report, Company or Person", required=True),
            body("ItemId", "integer", required=True),
        )),
        APIEndpoint("folders_remove_item", "/2.0/folders/{folderId}/items", DELETE,
                    "Remove an item from a folder", (
                        FOLDER_ID,
                        query("ItemType", description="Report, Company or Person", required=True),
                        query("ItemId", "integer", required=True),
                    )),

        # Notes
        APIEndpoint("notes_list", "/2.0/notes", GET, "List your notes", (*PAGINATION, *SORTING)),
        APIEndpoint("notes_get", "/2.0/notes/{noteId}", GET, "Get a note", (NOTE_ID,)),
        APIEndpoint("notes_create", "/2.0/notes", POST, "Create a note", (
            body("Title", required=True),
            body("Body"),
            body("ReportId", "integer"),
            body("CompanyId", "integer"),
            body("NameId", "integer"),
        )),
        APIEndpoint("notes_update", "/2.0/notes/{noteId}", PATCH, "Update a note", (
            NOTE_ID,
            body("Title"),
            body("Body"),
        )),
        APIEndpoint("notes_delete", "/2.0/notes/{noteId}", DELETE, "Delete a note", (NOTE_ID,)),

        # Tasks
        APIEndpoint("tasks_list", "/2.0/tasks", GET, "List your tasks", (*PAGINATION, *SORTING)),
        APIEndpoint("tasks_get", "/2.0/tasks/{taskId}", GET, "Get a task", (TASK_ID,)),
        APIEndpoint("tasks_create", "/2.0/tasks", POST, "Create a task", (
            body("Title", required=True),
            body("Description"),
            body("DueDate", description="Due date (YYYY-MM-DD)"),
            body("ReportId", "integer"),
            body("CompanyId", "integer"),
            body("NameId", "integer"),
        )),
        APIEndpoint("tasks_update", "/2.0/tasks/{taskId}", PATCH, "Update a task", (
            TASK_ID,
            body("Title"),
            body("Description"),
            body("DueDate", description="Due date (YYYY-MM-DD)"),
            body("Status"),
        )),
        APIEndpoint("tasks_delete", "/2.0/tasks/{taskId}", DELETE, "Delete a task", (TASK_ID,)),

        # Saved searches
        APIEndpoint("searches_list", "/2.0/searches", GET, "List your saved searches", PAGINATION),
        APIEndpoint("searches_get", "/2.0/searches/{searchId}", GET, "Get a saved search", (SEARCH_ID,)),
        APIEndpoint("searches_results", "/2.0/searches/{searchId}/results", GET,
                    "Run a saved search and return its results", (SEARCH_ID, *PAGINATION)),
        APIEndpoint("searches_delete", "/2.0/searches/{searchId}", DELETE,
                    "Delete a saved search", (SEARCH_ID,)),

        # News
        APIEndpoint("news_list", "/2.0/news", GET, "List industry news entries", (*PAGINATION, *DATE_RANGE)),
        APIEndpoint("news_get", "/2.0/news/{entryId}", GET, "Get a news entry", (path("entryId", "News entry id"),)),
    )


ENDPOINTS: Dict[str, APIEndpoint] = {endpoint.name: endpoint for endpoint in _endpoints()}


def get_endpoint(name: str) -> APIEndpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint: {name}") from None


__all__ = [
    "ENDPOINTS",
    "get_endpoint",
]
