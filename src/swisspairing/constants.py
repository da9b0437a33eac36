# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# A pairing-allocated bye is worth a full point
BYE_SCORE = 1.0
# Withdrawn players score nothing for the rounds they miss
ABSENT_SCORE = 0.0

# SwissConfig defaults
DEFAULT_TOTAL_ROUNDS = 5
DEFAULT_RATING_IMPORTANCE = 0.1
DEFAULT_COLOR_BALANCE_WEIGHT = 0.2
DEFAULT_MAX_SEARCH_ITERATIONS = 200_000

# Rating difference at which the rating term of the colour tie-break saturates
COLOR_RATING_SCALE = 400.0

# Rating bounds accepted for players
MIN_RATING = 0
MAX_RATING = 3500

# Environment variables read by the logging setup
LOG_LEVEL_ENV = "SWISSPAIRING_LOG_LEVEL"
LOG_DIR_ENV = "SWISSPAIRING_LOG_DIR"
LOG_FILE_NAME = "swiss-pairing.log"
