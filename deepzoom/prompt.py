"""
In-window text prompt for numeric input.

A Prompt shows one or more labelled text fields over the fractal. Tab
moves between fields, Enter submits, Escape cancels. The caller parses
the submitted strings and can push an error message back into the prompt
with set_error() to keep it open.
"""

import pygame


class TextInput:
    """A single-line text input field."""

    def __init__(self, x, y, width, height=24, label="", initial_text=""):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.label = label
        self.text = initial_text
        self.active = False
        self.cursor_pos = len(initial_text)
        self.cursor_visible = True
        self.cursor_timer = 0

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, self.height)

    def handle_key(self, event):
        """Edit the text for a KEYDOWN event. Returns True if the text changed."""
        old_text = self.text
        if event.key == pygame.K_BACKSPACE:
            if self.cursor_pos > 0:
                self.text = self.text[:self.cursor_pos-1] + self.text[self.cursor_pos:]
                self.cursor_pos -= 1
        elif event.key == pygame.K_DELETE:
            if self.cursor_pos < len(self.text):
                self.text = self.text[:self.cursor_pos] + self.text[self.cursor_pos+1:]
        elif event.key == pygame.K_LEFT:
            self.cursor_pos = max(0, self.cursor_pos - 1)
        elif event.key == pygame.K_RIGHT:
            self.cursor_pos = min(len(self.text), self.cursor_pos + 1)
        elif event.key == pygame.K_HOME:
            self.cursor_pos = 0
        elif event.key == pygame.K_END:
            self.cursor_pos = len(self.text)
        elif event.unicode and event.unicode.isprintable():
            self.text = self.text[:self.cursor_pos] + event.unicode + self.text[self.cursor_pos:]
            self.cursor_pos += 1
        return old_text != self.text

    def draw(self, screen, font):
        rect = self.get_rect()

        label_surface = font.render(self.label, True, (200, 200, 200))
        screen.blit(label_surface, (rect.left, rect.top - 18))

        bg_color = (60, 60, 70) if self.active else (50, 50, 55)
        pygame.draw.rect(screen, bg_color, rect)
        border_color = (100, 140, 180) if self.active else (80, 80, 80)
        pygame.draw.rect(screen, border_color, rect, 2 if self.active else 1)

        text_surface = font.render(self.text, True, (220, 220, 220))
        text_rect = text_surface.get_rect()
        text_rect.centery = rect.centery
        text_rect.left = rect.left + 6
        screen.blit(text_surface, text_rect)

        if self.active:
            self.cursor_timer += 1
            if self.cursor_timer > 30:
                self.cursor_visible = not self.cursor_visible
                self.cursor_timer = 0

            if self.cursor_visible:
                pre_cursor = font.render(self.text[:self.cursor_pos], True, (220, 220, 220))
                cursor_x = rect.left + 6 + pre_cursor.get_width()
                pygame.draw.line(screen, (220, 220, 220),
                                 (cursor_x, rect.top + 4),
                                 (cursor_x, rect.bottom - 4), 2)


class Prompt:
    """
    Modal overlay collecting one or more strings.

    Attributes:
        kind: Caller-defined tag saying what the prompt is for
        submitted: List of field texts once Enter was pressed, else None
        cancelled: True once Escape was pressed
    """

    WIDTH = 360
    FIELD_SPACING = 50

    def __init__(self, kind, title, labels, initial=None, screen_size=(800, 800)):
        self.kind = kind
        self.title = title
        self.error = None
        self.submitted = None
        self.cancelled = False
        self.font = None

        initial = initial or [""] * len(labels)
        height = 60 + self.FIELD_SPACING * len(labels)
        self.x = max(0, (screen_size[0] - self.WIDTH) // 2)
        self.y = max(0, (screen_size[1] - height) // 2)
        self.height = height

        self.fields = []
        for idx, (label, text) in enumerate(zip(labels, initial)):
            field = TextInput(self.x + 12, self.y + 50 + idx * self.FIELD_SPACING,
                              self.WIDTH - 24, label=label, initial_text=text)
            self.fields.append(field)
        self.focus = 0
        self.fields[0].active = True

    @property
    def done(self):
        return self.cancelled or self.submitted is not None

    def set_error(self, message):
        """Show message and reopen the prompt for editing."""
        self.error = message
        self.submitted = None

    def handle_event(self, event):
        """Returns True if the event was consumed by the prompt."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for idx, field in enumerate(self.fields):
                if field.get_rect().collidepoint(event.pos):
                    self._set_focus(idx)
            return True

        if event.type != pygame.KEYDOWN:
            return False

        if event.key == pygame.K_ESCAPE:
            self.cancelled = True
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if self.focus < len(self.fields) - 1:
                self._set_focus(self.focus + 1)
            else:
                self.submitted = [field.text for field in self.fields]
        elif event.key == pygame.K_TAB:
            self._set_focus((self.focus + 1) % len(self.fields))
        else:
            if self.fields[self.focus].handle_key(event):
                self.error = None
        return True

    def _set_focus(self, idx):
        self.fields[self.focus].active = False
        self.focus = idx
        self.fields[idx].active = True

    def draw(self, screen):
        if self.font is None:
            pygame.font.init()
            self.font = pygame.font.SysFont('Arial', 14)

        rect = pygame.Rect(self.x, self.y, self.WIDTH, self.height + (18 if self.error else 0))
        pygame.draw.rect(screen, (40, 40, 40), rect)
        pygame.draw.rect(screen, (100, 100, 100), rect, 1)

        title = self.font.render(self.title, True, (230, 230, 230))
        screen.blit(title, (self.x + 12, self.y + 8))

        for field in self.fields:
            field.draw(screen, self.font)

        if self.error:
            error = self.font.render(self.error, True, (255, 110, 110))
            screen.blit(error, (self.x + 12, self.y + self.height - 6))
