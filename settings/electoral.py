"""Electoral votes per parent region (state FIPS), 2020 census apportionment."""

ELECTORAL_VOTES: dict[str, int] = {
    "01": 9,  # Alabama
    "02": 3,  # Alaska
    "04": 11,  # Arizona
    "05": 6,  # Arkansas
    "06": 54,  # California
    "08": 10,  # Colorado
    "09": 7,  # Connecticut
    "10": 3,  # Delaware
    "11": 3,  # District of Columbia
    "12": 30,  # Florida
    "13": 16,  # Georgia
    "15": 4,  # Hawaii
    "16": 4,  # Idaho
    "17": 19,  # Illinois
    "18": 11,  # Indiana
    "19": 6,  # Iowa
    "20": 6,  # Kansas
    "21": 8,  # Kentucky
    "22": 8,  # Louisiana
    "23": 4,  # Maine
    "24": 10,  # Maryland
    "25": 11,  # Massachusetts
    "26": 15,  # Michigan
    "27": 10,  # Minnesota
    "28": 6,  # Mississippi
    "29": 10,  # Missouri
    "30": 4,  # Montana
    "31": 5,  # Nebraska
    "32": 6,  # Nevada
    "33": 4,  # New Hampshire
    "34": 14,  # New Jersey
    "35": 5,  # New Mexico
    "36": 28,  # New York
    "37": 16,  # North Carolina
    "38": 3,  # North Dakota
    "39": 17,  # Ohio
    "40": 7,  # Oklahoma
    "41": 8,  # Oregon
    "42": 19,  # Pennsylvania
    "44": 4,  # Rhode Island
    "45": 9,  # South Carolina
    "46": 3,  # South Dakota
    "47": 11,  # Tennessee
    "48": 40,  # Texas
    "49": 6,  # Utah
    "50": 3,  # Vermont
    "51": 13,  # Virginia
    "53": 12,  # Washington
    "54": 4,  # West Virginia
    "55": 10,  # Wisconsin
    "56": 3,  # Wyoming
}

TOTAL_ELECTORAL_VOTES = 538
VOTES_TO_WIN = 270

# |margin| at or below this is an uncalled region
TIE_MARGIN_PP = 0.01
