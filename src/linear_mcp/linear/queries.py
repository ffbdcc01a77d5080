"""GraphQL documents sent to the Linear API."""

ISSUE_FIELDS = """
    id
    identifier
    title
    description
    priority
    estimate
    url
"""

ISSUE_DETAILS_QUERY = """
query IssueDetails($id: String!) {
  issue(id: $id) {
    id
    state { id name }
    assignee { id name }
    team { id name key }
    labels { nodes { id name } }
  }
}
"""

LIST_ISSUES_QUERY = f"""
query ListIssues($first: Int!) {{
  issues(first: $first, orderBy: updatedAt) {{
    nodes {{ {ISSUE_FIELDS} }}
  }}
}}
"""

GET_ISSUE_QUERY = f"""
query GetIssue($id: String!) {{
  issue(id: $id) {{
    {ISSUE_FIELDS}
    state {{ id name }}
    assignee {{ id name }}
    team {{ id name key }}
  }}
}}
"""

SEARCH_ISSUES_QUERY = f"""
query SearchIssues($filter: IssueFilter, $first: Int!, $includeArchived: Boolean) {{
  issues(filter: $filter, first: $first, includeArchived: $includeArchived) {{
    nodes {{ {ISSUE_FIELDS} }}
  }}
}}
"""

USER_ASSIGNED_ISSUES_QUERY = f"""
query UserAssignedIssues($id: String!, $first: Int!, $includeArchived: Boolean) {{
  user(id: $id) {{
    id
    name
    assignedIssues(first: $first, includeArchived: $includeArchived, orderBy: updatedAt) {{
      nodes {{ {ISSUE_FIELDS} }}
    }}
  }}
}}
"""

VIEWER_ASSIGNED_ISSUES_QUERY = f"""
query ViewerAssignedIssues($first: Int!, $includeArchived: Boolean) {{
  viewer {{
    id
    name
    assignedIssues(first: $first, includeArchived: $includeArchived, orderBy: updatedAt) {{
      nodes {{ {ISSUE_FIELDS} }}
    }}
  }}
}}
"""

TEAM_ISSUES_QUERY = f"""
query TeamIssues($id: String!) {{
  team(id: $id) {{
    id
    name
    issues {{
      nodes {{ {ISSUE_FIELDS} }}
    }}
  }}
}}
"""

ISSUE_CREATE_MUTATION = f"""
mutation IssueCreate($input: IssueCreateInput!) {{
  issueCreate(input: $input) {{
    success
    issue {{ {ISSUE_FIELDS} }}
  }}
}}
"""

ISSUE_UPDATE_MUTATION = f"""
mutation IssueUpdate($id: String!, $input: IssueUpdateInput!) {{
  issueUpdate(id: $id, input: $input) {{
    success
    issue {{ {ISSUE_FIELDS} }}
  }}
}}
"""

COMMENT_CREATE_MUTATION = """
mutation CommentCreate($input: CommentCreateInput!) {
  commentCreate(input: $input) {
    success
    comment {
      id
      body
      url
      createdAt
      issue { id identifier title url }
    }
  }
}
"""

LABELS_QUERY = """
query IssueLabels($first: Int!) {
  issueLabels(first: $first) {
    nodes { id name color team { id name } }
  }
}
"""

PROJECTS_QUERY = """
query Projects($first: Int!) {
  projects(first: $first) {
    nodes { id name description url state }
  }
}
"""

PROJECT_QUERY = """
query Project($id: String!) {
  project(id: $id) {
    id
    name
    description
    url
    state
    progress
    targetDate
    projectMilestones(first: 10) { nodes { id name targetDate } }
    projectUpdates(first: 5) { nodes { id body health createdAt } }
    documents(first: 10) { nodes { id title url } }
  }
}
"""

VIEWER_QUERY = """
query Viewer {
  viewer {
    id
    name
    email
    admin
    teams { nodes { id name key } }
  }
  organization { id name urlKey }
}
"""

ORGANIZATION_QUERY = """
query Organization {
  organization {
    id
    name
    urlKey
    teams { nodes { id name key } }
    users { nodes { id name email admin active } }
  }
}
"""
